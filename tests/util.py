from btreemap.btree import BTree
from btreemap.constants import TreeConf
from btreemap.node import BNode, KeyValPair


def leaf(tree_conf: TreeConf, *keys) -> BNode:
    return BNode(tree_conf, contents=[KeyValPair(k, str(k)) for k in keys])


def branch(tree_conf: TreeConf, keys, children) -> BNode:
    return BNode(tree_conf, contents=[KeyValPair(k, str(k)) for k in keys], children=list(children), leaf=False)


def count_pairs(node: BNode) -> int:
    return len(node.contents) + sum(count_pairs(child) for child in node.children)


def tree_from(root: BNode) -> BTree:
    """Hand a hand-built node structure over to a fresh tree."""
    tree = BTree(root.tree_conf.min_degree)
    tree._root = root
    tree._size = count_pairs(root)
    return tree


def build_tree(keys, min_degree: int = 2) -> BTree:
    tree = BTree(min_degree)
    for key in keys:
        tree.insert(key, str(key))
    return tree
