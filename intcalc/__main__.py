import sys

from intcalc.cli import main

sys.exit(main())
