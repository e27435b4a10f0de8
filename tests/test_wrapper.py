import logging

import pytest

from btreemap import create_tree
from btreemap.btree import BTree
from btreemap.wrapper import log_wrapper, release_log


def test_local_log(tmp_path):
    log_file = tmp_path / 'tree.log'
    tree = create_tree(log='local', log_file=str(log_file))
    tree.insert(1, 'one')
    tree.insert(2, 'two')
    tree.delete(1)
    with pytest.raises(ValueError):
        tree.insert(2, 'again')
    release_log(tree)

    records = log_file.read_text().splitlines()
    assert len(records) == 4
    assert "Called: insert(1,'one')" in records[0]
    assert 'Called: delete(1)' in records[2]
    assert 'ValueError' in records[3]


def test_wrapped_tree_behaves_like_tree(tmp_path):
    tree = log_wrapper(BTree(), ('insert',), log_file=str(tmp_path / 'x.log'))
    tree.insert('a', 1)
    tree['b'] = 2
    assert 'a' in tree and 'b' in tree
    assert len(tree) == 2
    assert tree['b'] == 2
    assert tree.search('a').value == 1
    del tree['a']
    assert str(tree) == ' [ null b null ] '
    assert isinstance(release_log(tree), BTree)


def test_only_wrapped_instance_logged(tmp_path):
    log_file = tmp_path / 'one.log'
    logged = log_wrapper(BTree(), ('insert',), log_file=str(log_file))
    plain = BTree()
    plain.insert(1, 1)
    logged.insert(2, 2)
    release_log(logged)
    assert len(log_file.read_text().splitlines()) == 1
    assert not hasattr(plain.insert, '__wrapped__')


def test_socket_mode_needs_address():
    with pytest.raises(ValueError):
        create_tree(log='tcp')
    with pytest.raises(ValueError):
        create_tree(log='udp', host='localhost')


def test_unknown_mode():
    with pytest.raises(ValueError):
        create_tree(log='syslog')
    with pytest.raises(ValueError):
        log_wrapper(BTree(), ('insert',), log_mode='syslog')


def test_plain_tree_by_default():
    tree = create_tree(3)
    assert isinstance(tree, BTree)
    assert tree.min_degree == 3


def test_item_access_and_remove_logged(tmp_path):
    log_file = tmp_path / 'items.log'
    tree = create_tree(log='local', log_file=str(log_file))
    tree[1] = 'one'
    del tree[1]
    tree.insert(2, 'two')
    tree.remove(2)
    with pytest.raises(KeyError):
        del tree[2]
    with pytest.raises(KeyError):
        tree.remove(3)
    release_log(tree)

    records = log_file.read_text().splitlines()
    assert len(records) == 6
    assert "Called: insert(1,'one',override=True)" in records[0]
    assert 'Called: delete(1) -> {1 => one}' in records[1]
    assert "Called: insert(2,'two')" in records[2]
    assert 'Called: delete(2) -> {2 => two}' in records[3]
    assert 'Called: delete(2) -> None' in records[4]
    assert 'Called: delete(3) -> None' in records[5]
    assert len(tree) == 0


def test_released_loggers_not_registered(tmp_path):
    registered = set(logging.Logger.manager.loggerDict)
    for i in range(5):
        release_log(log_wrapper(BTree(), ('insert',), log_file=str(tmp_path / '{0}.log'.format(i))))
    assert set(logging.Logger.manager.loggerDict) == registered


def test_unexpected_options_rejected(tmp_path):
    with pytest.raises(TypeError):
        create_tree(log='tcp', host='localhost', port=9020, log_file=str(tmp_path / 'x.log'))
    with pytest.raises(TypeError):
        create_tree(log='udp', host='localhost', port=9020, verbose=True)
    with pytest.raises(TypeError):
        create_tree(log='local', log_file=str(tmp_path / 'y.log'), host='localhost')
    with pytest.raises(TypeError):
        create_tree(2, log_file=str(tmp_path / 'z.log'))
    assert not (tmp_path / 'y.log').exists()
