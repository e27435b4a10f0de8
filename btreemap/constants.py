from collections import namedtuple

__all__ = ['DEFAULT_MIN_DEGREE', 'DEFAULT_LOGGER_NAME', 'DEFAULT_LOG_FILE', 'METHODS_TO_LOG', 'NULL_CHILD',
           'TreeConf']

# smallest legal minimum degree, also the default one (a 2-3-4 tree)
DEFAULT_MIN_DEGREE = 2

DEFAULT_LOGGER_NAME = 'btreemap'

DEFAULT_LOG_FILE = 'log.log'

METHODS_TO_LOG = (
    'insert',
    'delete',
)

# how an absent child is rendered by str(node)
NULL_CHILD = 'null'


class TreeConf(namedtuple('TreeConf', [
    'min_degree',  # minimum degree t of B tree
])):
    __slots__ = ()

    @property
    def max_keys(self) -> int:
        """A node holding this many pairs is full."""
        return 2 * self.min_degree - 1

    @property
    def max_children(self) -> int:
        return 2 * self.min_degree

    @property
    def min_keys(self) -> int:
        """Lower bound of pairs for every node except the root."""
        return self.min_degree - 1
