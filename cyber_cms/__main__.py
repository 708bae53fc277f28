import sys

from cyber_cms.shell import main

if __name__ == "__main__":
    sys.exit(main())
