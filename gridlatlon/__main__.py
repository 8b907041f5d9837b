import sys

from gridlatlon.cli import main

sys.exit(main())
