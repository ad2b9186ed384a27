import sys

from src.rpn.cli import main

sys.exit(main())
