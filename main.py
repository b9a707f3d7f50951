import sys

from mvc_bnb.cli import main

if __name__ == "__main__":
    sys.exit(main())
