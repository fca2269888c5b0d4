import sys

from subdb.main import main

sys.exit(main())
