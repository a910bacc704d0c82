import sys

from okpalette.cli import main

sys.exit(main())
