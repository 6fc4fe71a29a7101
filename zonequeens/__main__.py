import sys

from zonequeens import config
from zonequeens.app import main

if __name__ == "__main__":
    size = int(sys.argv[1]) if len(sys.argv) > 1 else config.DEFAULT_BOARD_SIZE
    main(size)
