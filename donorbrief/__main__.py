import sys

from donorbrief.cli import main

sys.exit(main())
