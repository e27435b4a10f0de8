import threading

from btreemap.btree import BTree
from btreemap.invariants import check_tree
from btreemap.sync import LockedTree

THREADS = 4
KEYS_PER_THREAD = 250


def test_basic_ops():
    tree = LockedTree(min_degree=3)
    tree.insert('a', 1)
    assert 'a' in tree
    assert tree.get('a') == 1
    assert tree.search('a').value == 1
    assert len(tree) == 1
    assert tree.delete('a').key == 'a'
    assert tree.get('a', 'gone') == 'gone'
    assert tree.tree.min_degree == 3


def test_wrap_existing_tree():
    plain = BTree()
    plain.insert(1, 'one')
    locked = LockedTree(plain)
    assert locked.get(1) == 'one'
    with locked.read_transaction as tree:
        assert tree is plain


def test_concurrent_writers():
    locked = LockedTree()

    def work(offset):
        for key in range(offset, offset + KEYS_PER_THREAD):
            locked.insert(key, key)
        for key in range(offset, offset + KEYS_PER_THREAD, 2):
            locked.delete(key)

    threads = [threading.Thread(target=work, args=(i * KEYS_PER_THREAD,)) for i in range(THREADS)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    with locked.read_transaction as tree:
        keys = check_tree(tree)
    assert keys == list(range(1, THREADS * KEYS_PER_THREAD, 2))
    assert len(locked) == THREADS * KEYS_PER_THREAD // 2
