import sys

from sitegen.pipeline import main

sys.exit(main())
