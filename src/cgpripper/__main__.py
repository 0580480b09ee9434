import sys

from cgpripper.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
