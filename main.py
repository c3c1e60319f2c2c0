import sys

from byteshell.shell import main

if __name__ == "__main__":
    sys.exit(main())
