import sys

from console_derby.game import main

if __name__ == "__main__":
    sys.exit(main())
