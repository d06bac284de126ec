import sys

from linguapo.cli import main

sys.exit(main())
