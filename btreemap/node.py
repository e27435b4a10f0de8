import bisect
import functools

from btreemap.constants import NULL_CHILD, TreeConf


@functools.total_ordering
class KeyValPair(object):
    """
    Unit stores a pair of key-value. Ordered by key, so a sorted list of pairs
    can be bisected with a bare key.
    """
    __slots__ = ('_key', '_value')

    def __init__(self, key, value=None):
        self._key = key
        self._value = value

    @property
    def key(self):
        return self._key

    @property
    def value(self):
        return self._value

    def __eq__(self, other):
        if isinstance(other, KeyValPair):
            return self._key == other._key and self._value == other._value
        return self._key == other

    def __lt__(self, other):
        if isinstance(other, KeyValPair):
            return self._key < other._key
        return self._key < other

    __hash__ = None

    def __str__(self):
        return '{{{key} => {val}}}'.format(key=self._key, val=self._value)

    __repr__ = __str__


class BNode(object):
    """
    A node of B tree. `contents` holds the ordered pairs, `children` holds
    one more subnode than pairs for a branch and nothing for a leaf.
    All rebalancing is done top-down by the parent, so nodes never know
    their own parent.
    """
    __slots__ = ('tree_conf', 'contents', 'children', 'leaf')

    def __init__(self, tree_conf: TreeConf, contents: list = None, children: list = None, leaf: bool = True):
        self.tree_conf = tree_conf
        self.contents = contents or []
        self.children = children or []
        self.leaf = leaf
        if self.children:
            assert not self.leaf, 'Leaf node can not own children'
            assert len(self.contents) + 1 == len(self.children), \
                'One more child than pair required'

    def __repr__(self):
        name = 'Leaf' if self.leaf else 'Branch'
        return '<{name} [pairs= {pairs}]>'.format(
            name=name, pairs=','.join([str(it) for it in self.contents]))

    def __str__(self):
        """
        Render subtree as ` [ c0 k1 c1 ... km cm ] `, absent children (all
        children of a leaf) rendered as `null`.
        """
        if self.leaf:
            children = [NULL_CHILD] * (len(self.contents) + 1)
        else:
            children = [NULL_CHILD if ch is None else str(ch) for ch in self.children]
        s = ' [ ' + children[0]
        for pair, child in zip(self.contents, children[1:]):
            s += ' {key} {child}'.format(key=pair.key, child=child)
        return s + ' ] '

    @property
    def count(self) -> int:
        return len(self.contents)

    @property
    def is_full(self) -> bool:
        return len(self.contents) >= self.tree_conf.max_keys

    @property
    def can_lend(self) -> bool:
        """True if a pair can be taken away without underflow."""
        return len(self.contents) >= self.tree_conf.min_degree

    def find(self, key):
        """
        :return: (node, index) of the pair holding `key` in this subtree, or (None, None).
        """
        node = self
        while True:
            index = bisect.bisect_left(node.contents, key)
            if index < len(node.contents) and node.contents[index].key == key:
                return node, index
            if node.leaf:
                return None, None
            node = node.children[index]

    def search(self, key):
        """
        :return: pair whose key equals `key` in this subtree, else None.
        """
        node, index = self.find(key)
        return None if node is None else node.contents[index]

    def split_child(self, index: int):
        """
        Split the full child at `index` into two nodes of t-1 pairs and lift
        the median into this (non-full) node.
        """
        t = self.tree_conf.min_degree
        child = self.children[index]
        assert child.is_full and not self.is_full
        right = type(self)(self.tree_conf,
                           contents=child.contents[t:],
                           children=child.children[t:],
                           leaf=child.leaf)
        median = child.contents[t - 1]
        del child.contents[t - 1:]
        del child.children[t:]
        self.children.insert(index + 1, right)
        self.contents.insert(index, median)

    def insert_nonfull(self, pair: KeyValPair):
        """
        Insert pair into this non-full subtree, splitting every full child
        met on the way down so that a split never has to climb back up.
        """
        node = self
        while not node.leaf:
            index = bisect.bisect_left(node.contents, pair.key)
            if node.children[index].is_full:
                node.split_child(index)
                # the median just lifted decides which half to descend
                if node.contents[index] < pair.key:
                    index += 1
            node = node.children[index]
        index = bisect.bisect_left(node.contents, pair.key)
        node.contents.insert(index, pair)

    def predecessor(self) -> KeyValPair:
        """Last pair of the rightmost leaf in this subtree."""
        node = self
        while not node.leaf:
            node = node.children[-1]
        return node.contents[-1]

    def successor(self) -> KeyValPair:
        """First pair of the leftmost leaf in this subtree."""
        node = self
        while not node.leaf:
            node = node.children[0]
        return node.contents[0]

    def delete(self, key):
        """
        Remove `key` from this subtree. Caller guarantees this node is either
        the root or holds at least t pairs.
        :return: removed pair, or None if key was absent.
        """
        index = bisect.bisect_left(self.contents, key)
        present = index < len(self.contents) and self.contents[index].key == key

        if self.leaf:
            return self.contents.pop(index) if present else None
        if present:
            return self._delete_from_branch(index, key)
        return self.fill(index).delete(key)

    def _delete_from_branch(self, index: int, key):
        left, right = self.children[index], self.children[index + 1]
        removed = self.contents[index]
        if left.can_lend:
            pred = left.predecessor()
            self.contents[index] = pred
            left.delete(pred.key)
        elif right.can_lend:
            succ = right.successor()
            self.contents[index] = succ
            right.delete(succ.key)
        else:
            self.merge_children(index).delete(key)
        return removed

    def fill(self, index: int):
        """
        Make sure the child at `index` holds at least t pairs before the
        deletion descends into it, borrowing from a sibling or merging.
        :return: the node to descend into.
        """
        child = self.children[index]
        if child.can_lend:
            return child
        if index > 0 and self.children[index - 1].can_lend:
            self.rotate_right(index)
            return child
        if index < len(self.contents) and self.children[index + 1].can_lend:
            self.rotate_left(index)
            return child
        if index > 0:
            return self.merge_children(index - 1)
        return self.merge_children(index)

    def rotate_right(self, index: int):
        """Move one pair from the left sibling through the separator into child `index`."""
        child, sibling = self.children[index], self.children[index - 1]
        child.contents.insert(0, self.contents[index - 1])
        self.contents[index - 1] = sibling.contents.pop()
        if not sibling.leaf:
            child.children.insert(0, sibling.children.pop())

    def rotate_left(self, index: int):
        """Move one pair from the right sibling through the separator into child `index`."""
        child, sibling = self.children[index], self.children[index + 1]
        child.contents.append(self.contents[index])
        self.contents[index] = sibling.contents.pop(0)
        if not sibling.leaf:
            child.children.append(sibling.children.pop(0))

    def merge_children(self, index: int):
        """
        Fuse child `index`, separator `index` and child `index + 1` into child
        `index`. The right child is dropped.
        :return: the merged child.
        """
        left = self.children[index]
        right = self.children.pop(index + 1)
        left.contents.append(self.contents.pop(index))
        left.contents.extend(right.contents)
        left.children.extend(right.children)
        assert len(left.contents) <= self.tree_conf.max_keys
        return left
