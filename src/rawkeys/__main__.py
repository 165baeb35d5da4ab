import sys

from rawkeys.cli import main

sys.exit(main())
