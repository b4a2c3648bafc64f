import sys

from status_notifier.cli import main

if __name__ == "__main__":
    sys.exit(main())
