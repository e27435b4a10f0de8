"""
Embedded self test. Builds a few trees of minimum degree 2 and compares their rendering
with known-good strings, then runs a shuffled insert/delete stress round.
Run it with `python -m btreemap`, exit code is 0 only if every case matched.
"""
import argparse
import logging
import random
import sys

from btreemap.btree import BTree
from btreemap.constants import DEFAULT_LOGGER_NAME
from btreemap.invariants import InvariantError, check_tree

logger = logging.getLogger(DEFAULT_LOGGER_NAME)

SIX_INTS = ' [  [ null 1 null ]  2  [ null 3 null ]  4  [ null 5 null 6 null ]  ] '

# exercise 18.2-1 of CLRS
CLRS_CHARS = 'FSQKCLHTVWMRNPABXYDZE'
CLRS_RESULT = (' [  [  [ null A null ]  B  [ null C null D null E null ]  F  [ null H null ]  ]  K  '
               '[  [ null L null ]  M  [ null N null P null ]  ]  Q  [  [ null R null S null ]  T  '
               '[ null V null ]  W  [ null X null Y null Z null ]  ]  ] ')

# (key deleted before rendering or None, expected rendering)
DELETE_STEPS = (
    (None, ' [  [ null 1 null ]  2  [ null 3 null 4 null ]  ] '),
    (2, ' [  [ null 1 null ]  3  [ null 4 null ]  ] '),
    (1, ' [ null 3 null 4 null ] '),
    (4, ' [ null 3 null ] '),
    (3, ' [ null ] '),
)


class SelfTestFailure(Exception):
    """Raise when a rendering or a lookup doesn't match the expected result"""

    def __init__(self, expected, received):
        super().__init__('Test Failed:\nExpected: {0}\nReceived: {1}'.format(expected, received))
        self.expected = expected
        self.received = received


def _expect(expected, received):
    if expected != received:
        raise SelfTestFailure(expected, received)


def check_insert_ints():
    tree = BTree()
    for i, value in enumerate(['Test', 'Test2', 'Test3', 'Test4', 'Test5', 'Test6'], start=1):
        tree.insert(i, value)
    _expect(SIX_INTS, str(tree))

    found = tree.search(5)
    _expect('{5 => Test5}', str(found))
    _expect(None, tree.search(10))


def check_insert_chars():
    tree = BTree()
    for i, char in enumerate(CLRS_CHARS):
        tree.insert(char, 'char' + str(i))
    _expect(CLRS_RESULT, str(tree))


def check_delete():
    tree = BTree()
    for i in range(1, 5):
        tree.insert(i, 'Key ' + str(i))
    for key, expected in DELETE_STEPS:
        if key is not None:
            tree.delete(key)
        _expect(expected, str(tree))


def check_stress(count: int = 1000, seed=None):
    rand = random.Random(seed)
    keys = list(range(1, count + 1))
    rand.shuffle(keys)
    tree = BTree()
    alive = set()
    for key in keys:
        tree.insert(key, str(key))
        alive.add(key)
        _check_round(tree, alive)
    rand.shuffle(keys)
    for key in keys:
        tree.delete(key)
        alive.discard(key)
        _check_round(tree, alive)
    _expect(' [ null ] ', str(tree))


def _check_round(tree, alive):
    try:
        keys = check_tree(tree)
    except InvariantError as error:
        raise SelfTestFailure('a valid B tree', error)
    _expect(sorted(alive), keys)


CASES = (check_insert_ints, check_insert_chars, check_delete)


def run_tests(count: int = 1000, seed=None):
    """Run every case, raise SelfTestFailure on the first mismatch."""
    for case in CASES:
        case()
        logger.info('{name} passed'.format(name=case.__name__))
    if count:
        check_stress(count, seed)
        logger.info('check_stress passed ({count} keys, seed={seed})'.format(count=count, seed=seed))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog='btreemap', description='Run the embedded B tree self test.')
    parser.add_argument('--count', type=int, default=1000, help='keys used by the stress round, 0 skips it')
    parser.add_argument('--seed', type=int, default=None, help='seed of the stress round permutations')
    parser.add_argument('-v', '--verbose', action='store_true', help='log every passed case to stderr')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s %(name)s %(levelname)s %(message)s')
    try:
        run_tests(args.count, args.seed)
    except SelfTestFailure as failure:
        print(failure)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
