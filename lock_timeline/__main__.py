import sys

from lock_timeline.app import main

sys.exit(main())
