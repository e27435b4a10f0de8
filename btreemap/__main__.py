import sys

from btreemap.selftest import main

sys.exit(main())
