import sys

from pyuss.app import main

sys.exit(main())
