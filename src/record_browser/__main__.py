import sys

from record_browser.cli import main

if __name__ == "__main__":
    sys.exit(main())
