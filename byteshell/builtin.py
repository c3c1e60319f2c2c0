import os
from collections import namedtuple

from byteshell.config import CLEAR_SCREEN, VERSION

Builtin = namedtuple("Builtin", ["name", "func", "help"])


def builtin_cd(session, args):
    """Change directory"""
    path = args[1] if len(args) > 1 else os.getenv("HOME")
    if not path:
        print("cd: HOME not set", file=session.out)
        return 1
    try:
        os.chdir(path)
        return 0
    except OSError as e:
        print(f"cd: {path}: {e.strerror or e}", file=session.out)
        return 1


def builtin_exit(session, args):
    """Exit the shell"""
    print("Goodbye from ByteShell!", file=session.out)
    raise SystemExit(0)


def builtin_help(session, args):
    """Print help message"""
    print(f"\nByteShell v{VERSION} - Commands:", file=session.out)
    print("===========================", file=session.out)
    for entry in session.builtins:
        print(f"  {entry.name:<8} - {entry.help}", file=session.out)
    print("  Ctrl+C: Cancel current line", file=session.out)
    print("  Ctrl+D: Exit ByteShell\n", file=session.out)
    return 0


def builtin_clear(session, args):
    session.out.write(CLEAR_SCREEN)
    session.out.flush()
    return 0


def builtin_pwd(session, args):
    try:
        print(os.getcwd(), file=session.out)
    except OSError as e:
        print(f"pwd: {e}", file=session.out)
        return 1
    return 0


def builtin_echo(session, args):
    print(" ".join(args[1:]), file=session.out)
    return 0


def builtin_history(session, args):
    """Show command history"""
    session.history.show(session.out)
    return 0


DEFAULT_BUILTINS = (
    Builtin("cd", builtin_cd, "Change directory"),
    Builtin("exit", builtin_exit, "Exit ByteShell"),
    Builtin("quit", builtin_exit, "Exit ByteShell"),
    Builtin("help", builtin_help, "Show this help message"),
    Builtin("clear", builtin_clear, "Clear the screen"),
    Builtin("pwd", builtin_pwd, "Print working directory"),
    Builtin("echo", builtin_echo, "Print arguments"),
    Builtin("history", builtin_history, "Show command history"),
)


class BuiltinTable:
    """Read-only name -> Builtin lookup, kept in registration order."""

    def __init__(self, entries=DEFAULT_BUILTINS):
        table = {}
        for entry in entries:
            if entry.name in table:
                raise ValueError(f"duplicate builtin: {entry.name}")
            table[entry.name] = entry
        self._table = table

    def __contains__(self, name):
        return name in self._table

    def __iter__(self):
        return iter(self._table.values())

    def __len__(self):
        return len(self._table)

    def lookup(self, name):
        return self._table.get(name)


def execute_builtin(session, args):
    """
    Execute built-in command if it matches.
    Returns (executed: bool, exit_code: int)
    """
    if not args:
        return False, 0

    entry = session.builtins.lookup(args[0])
    if entry is None:
        return False, 0
    return True, entry.func(session, args)
