import sys

from detox_navigator.cli import main

if __name__ == "__main__":
    sys.exit(main())
