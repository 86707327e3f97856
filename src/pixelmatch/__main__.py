import sys

from pixelmatch.cli import main

sys.exit(main())
