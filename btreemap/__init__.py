from btreemap.btree import BTree
from btreemap.constants import DEFAULT_LOG_FILE, DEFAULT_MIN_DEGREE, METHODS_TO_LOG
from btreemap.node import BNode, KeyValPair
from btreemap.wrapper import log_wrapper

__version__ = '1.0.0'

__all__ = ('BTree', 'BNode', 'KeyValPair', 'create_tree')


def create_tree(min_degree: int = DEFAULT_MIN_DEGREE, **kwargs):
    log_mode = kwargs.pop('log', None)

    if log_mode == 'tcp' or log_mode == 'udp':
        host, port = kwargs.pop('host', None), kwargs.pop('port', None)
        if host is None or port is None:
            raise ValueError('Host and port of Log Socket should be specified')
        log_kwargs = dict(host=host, port=port)
    elif log_mode == 'local':
        log_kwargs = dict(log_file=kwargs.pop('log_file', DEFAULT_LOG_FILE))
    elif log_mode is not None:
        raise ValueError('No such log mode:{mode}'.format(mode=log_mode))

    if kwargs:
        raise TypeError('create_tree() got unexpected keyword arguments: {names}'.format(
            names=', '.join(sorted(kwargs))))

    tree = BTree(min_degree)
    if log_mode is not None:
        tree = log_wrapper(tree, METHODS_TO_LOG, log_mode=log_mode, **log_kwargs)
    return tree
