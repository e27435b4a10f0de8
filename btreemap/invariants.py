"""
Structural checks of a B tree. Violations are programmer bugs, so they are
reported as `InvariantError` (an AssertionError) rather than runtime errors.
"""
import math


class InvariantError(AssertionError):
    """Raise when the shape or the ordering of a tree is broken"""
    pass


def _check_node(node, tree_conf, is_root, lower, upper, depth, leaf_depths, keys):
    count = len(node.contents)
    if count > tree_conf.max_keys:
        raise InvariantError('{node!r} holds {count} pairs, more than {max}'.format(
            node=node, count=count, max=tree_conf.max_keys))
    if not is_root and count < tree_conf.min_keys:
        raise InvariantError('{node!r} holds {count} pairs, less than {min}'.format(
            node=node, count=count, min=tree_conf.min_keys))
    if is_root and count == 0 and not node.leaf:
        raise InvariantError('empty root must be a leaf')

    for prev, curr in zip(node.contents, node.contents[1:]):
        if not prev.key < curr.key:
            raise InvariantError('keys out of order in {node!r}'.format(node=node))
    if count:
        if lower is not None and not lower < node.contents[0].key:
            raise InvariantError('{key} not greater than separator {sep}'.format(
                key=node.contents[0].key, sep=lower))
        if upper is not None and not node.contents[-1].key < upper:
            raise InvariantError('{key} not less than separator {sep}'.format(
                key=node.contents[-1].key, sep=upper))

    if node.leaf:
        if node.children:
            raise InvariantError('leaf {node!r} owns children'.format(node=node))
        leaf_depths.add(depth)
        keys.extend(pair.key for pair in node.contents)
        return

    if len(node.children) != count + 1:
        raise InvariantError('{node!r} has {ch} children for {count} pairs'.format(
            node=node, ch=len(node.children), count=count))
    bounds = [lower] + [pair.key for pair in node.contents] + [upper]
    for i, child in enumerate(node.children):
        _check_node(child, tree_conf, False, bounds[i], bounds[i + 1], depth + 1, leaf_depths, keys)
        if i < count:
            keys.append(node.contents[i].key)


def check_tree(tree) -> list:
    """
    Verify shape and order of `tree`.
    :return: all keys of the tree in ascending order.
    """
    leaf_depths, keys = set(), []
    _check_node(tree.root, tree.tree_conf, True, None, None, 1, leaf_depths, keys)
    if len(leaf_depths) != 1:
        raise InvariantError('leaves found at depths {depths}'.format(depths=sorted(leaf_depths)))
    if len(keys) != len(tree):
        raise InvariantError('tree reports {size} pairs but holds {real}'.format(size=len(tree), real=len(keys)))
    return keys


def height_bound(size: int, min_degree: int) -> float:
    """Maximum number of levels of a B tree holding `size` >= 1 keys."""
    return math.log((size + 1) / 2, min_degree) + 1
