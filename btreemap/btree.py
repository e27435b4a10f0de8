import logging

from btreemap.constants import DEFAULT_LOGGER_NAME, DEFAULT_MIN_DEGREE, TreeConf
from btreemap.node import BNode, KeyValPair

logger = logging.getLogger(DEFAULT_LOGGER_NAME)


class BTree(object):
    """
    In-memory B tree of minimum degree t (CLRS flavour). Every node except the root holds
    between t-1 and 2t-1 pairs, all leaves sit at the same depth. Insertion splits full
    nodes and deletion refills thin nodes on the way down, so no operation ever walks
    back up the tree.
    Not thread-safe, see `btreemap.sync.LockedTree`.
    """
    __slots__ = ('_tree_conf', '_root', '_size')
    BRANCH = LEAF = BNode

    def __init__(self, min_degree: int = DEFAULT_MIN_DEGREE):
        if not isinstance(min_degree, int) or min_degree < 2:
            raise ValueError('minimum degree of B tree should be an integer >= 2, got {0!r}'.format(min_degree))
        self._tree_conf = TreeConf(min_degree=min_degree)
        self._root = self.LEAF(self._tree_conf)
        self._size = 0

    def search(self, key):
        """
        :param key: key expected to be searched in the tree.
        :return: stored KeyValPair whose key equals `key`, None if not found.
        """
        return self._root.search(key)

    def insert(self, key, value=None, override=False):
        """
        :param key: key to be inserted
        :param value: value to be set corresponding to the key
        :param override: if override is true and key has existed, the new
                         value will override the old one.
        """
        node, index = self._root.find(key)
        if node is not None:
            if not override:
                raise ValueError('{key} has existed'.format(key=key))
            node.contents[index] = KeyValPair(key, value)
            return

        root = self._root
        if root.is_full:
            new_root = self.BRANCH(self._tree_conf, children=[root], leaf=False)
            new_root.split_child(0)
            self._root = root = new_root
            logger.debug('Root split, height grows to {height}'.format(height=self.height))
        root.insert_nonfull(KeyValPair(key, value))
        self._size += 1

    def delete(self, key):
        """
        Delete `key` if it exists, silently do nothing otherwise.
        :return: the removed KeyValPair, or None.
        """
        removed = self._root.delete(key)
        if not self._root.contents and not self._root.leaf:
            # root lost its last separator, its only child takes over
            self._root = self._root.children[0]
            logger.debug('Root collapsed, height shrinks to {height}'.format(height=self.height))
        if removed is not None:
            self._size -= 1
        return removed

    def get(self, key, default=None):
        """
        :param key: key expected to be searched in the tree.
        :param default: if key doesn't exist, return default.
        :return: value corresponding to the key if key exists.
        """
        pair = self.search(key)
        return default if pair is None else pair.value

    def remove(self, key):
        """
        Remove target key, raise KeyError if it doesn't exist.
        """
        if self.delete(key) is None:
            raise KeyError('{key} not in {self}'.format(key=key, self=self.__class__.__name__))

    def __contains__(self, key):
        """Support for keyword 'in' operator."""
        return self.search(key) is not None

    def __len__(self):
        """Support for len() built-in function."""
        return self._size

    def __getitem__(self, key):
        pair = self.search(key)
        if pair is None:
            raise KeyError(key)
        return pair.value

    def __setitem__(self, key, value):
        self.insert(key, value, override=True)

    __delitem__ = remove

    def __str__(self):
        return str(self._root)

    def __repr__(self):
        def recurse(node, all_items, depth):
            all_items.append(('  ' * depth) + repr(node))
            for child in node.children:
                recurse(child, all_items, depth + 1)

        _all = list()
        recurse(self._root, _all, 0)
        return '\n'.join(_all)

    @property
    def root(self) -> BNode:
        return self._root

    @property
    def tree_conf(self) -> TreeConf:
        return self._tree_conf

    @property
    def min_degree(self):
        return self._tree_conf.min_degree

    @min_degree.setter
    def min_degree(self, value):
        raise RuntimeError('minimum degree of B tree is read only')

    @property
    def height(self) -> int:
        """Number of levels, a lonely leaf root counts as 1."""
        node, height = self._root, 1
        while not node.leaf:
            node = node.children[0]
            height += 1
        return height
