import shutil
import sys

import psutil

from byteshell.config import SHELL_NAME

EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126
EXIT_FAILURE = 1


def spawn(args):
    """Start args[0] with args as its argv, sharing the shell's stdio"""
    return psutil.Popen(args)


def wait_child(proc):
    """
    Block until the child exits.
    Ctrl+C while waiting does not cancel the child; keep waiting.
    """
    while True:
        try:
            return proc.wait()
        except KeyboardInterrupt:
            continue


def run_external(args, out=None):
    """
    Chạy lệnh ngoài và đợi nó kết thúc.
    Returns: exit_code
    """
    out = out or sys.stdout
    name = args[0]

    if shutil.which(name) is None:
        print(f"{SHELL_NAME}: command not found: {name}", file=out)
        return EXIT_NOT_FOUND

    try:
        proc = spawn(args)
    except FileNotFoundError:
        print(f"{SHELL_NAME}: command not found: {name}", file=out)
        return EXIT_NOT_FOUND
    except PermissionError:
        print(f"{SHELL_NAME}: permission denied: {name}", file=out)
        return EXIT_NOT_EXECUTABLE
    except OSError as e:
        # fork/exec failures such as EAGAIN or ENOMEM
        print(f"{SHELL_NAME}: failed to execute '{name}': {e}", file=out)
        return EXIT_FAILURE

    exit_code = wait_child(proc)
    if exit_code != 0:
        print(f"{SHELL_NAME}: process exited with code {exit_code}", file=out)
    return exit_code
