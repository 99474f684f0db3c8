import sys

from seopanel.cli import main

sys.exit(main())
