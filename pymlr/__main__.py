import sys

from pymlr.cli import main

sys.exit(main())
