import sys

from .find_duplicates import main

sys.exit(main())
