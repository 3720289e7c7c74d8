import sys

from pghexedit.cli import main

sys.exit(main())
