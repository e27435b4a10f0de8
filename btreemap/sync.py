"""
External synchronization for a B tree shared between threads. The tree keeps no lock
itself, readers share the tree while a writer holds it alone.
"""
import rwlock

from btreemap.btree import BTree
from btreemap.constants import DEFAULT_MIN_DEGREE


class LockedTree(object):
    __slots__ = ('_tree', '_lock')

    def __init__(self, tree: BTree = None, min_degree: int = DEFAULT_MIN_DEGREE):
        self._tree = tree if tree is not None else BTree(min_degree)
        self._lock = rwlock.RWLock()

    @property
    def write_transaction(self):
        class WriteTransaction:
            def __enter__(_self):
                self._lock.writer_lock.acquire()
                return self._tree

            def __exit__(_self, exc_type, exc_val, exc_tb):
                self._lock.writer_lock.release()

        return WriteTransaction()

    @property
    def read_transaction(self):
        class ReadTransaction:
            def __enter__(_self):
                self._lock.reader_lock.acquire()
                return self._tree

            def __exit__(_self, exc_type, exc_val, exc_tb):
                self._lock.reader_lock.release()

        return ReadTransaction()

    def search(self, key):
        with self.read_transaction as tree:
            return tree.search(key)

    def get(self, key, default=None):
        with self.read_transaction as tree:
            return tree.get(key, default)

    def insert(self, key, value=None, override=False):
        with self.write_transaction as tree:
            tree.insert(key, value, override)

    def delete(self, key):
        with self.write_transaction as tree:
            return tree.delete(key)

    def __contains__(self, key):
        with self.read_transaction as tree:
            return key in tree

    def __len__(self):
        with self.read_transaction as tree:
            return len(tree)

    @property
    def tree(self) -> BTree:
        """Underlying tree, access it only inside a transaction."""
        return self._tree
