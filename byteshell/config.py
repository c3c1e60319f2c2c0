import os

SHELL_NAME = "byteshell"
VERSION = "1.0"

MAX_INPUT = 1024   # buffer size, one slot kept free like a C string
MAX_HISTORY = 100

# Empty or unset disables history persistence
HISTORY_FILE = os.path.expanduser(os.getenv("BYTESHELL_HISTFILE", ""))

COLOR_RESET = "\033[0m"
COLOR_USER = "\033[1;32m"   # green
COLOR_PATH = "\033[1;34m"   # blue

CLEAR_LINE = "\r\033[K"
CLEAR_SCREEN = "\033[2J\033[H"
