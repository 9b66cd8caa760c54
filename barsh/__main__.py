import sys

from barsh.cli import main

sys.exit(main())
