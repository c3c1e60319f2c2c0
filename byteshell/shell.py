import argparse
import os
import sys

from byteshell.builtin import BuiltinTable, execute_builtin
from byteshell.config import (COLOR_PATH, COLOR_RESET, COLOR_USER,
                              HISTORY_FILE, MAX_HISTORY, VERSION)
from byteshell.editor import LineEditor
from byteshell.executor import run_external
from byteshell.history import HistoryStore
from byteshell.parser import tokenize
from byteshell.terminal import KeyReader, raw_mode


def prompt():
    """Generate shell prompt"""
    user = os.getenv("USER") or "user"
    try:
        cwd = os.getcwd()
    except OSError:
        cwd = "?"
    home = os.getenv("HOME")
    if home and cwd.startswith(home):
        cwd = "~" + cwd[len(home):]
    return f"{COLOR_USER}{user}{COLOR_RESET}:{COLOR_PATH}{cwd}{COLOR_RESET} $ "


def banner():
    return (
        "╔═════════════════════════╗\n"
        f"║      ByteShell v{VERSION}     ║\n"
        "╚═════════════════════════╝\n"
        "Type 'help' for commands\n\n"
    )


class ShellSession:
    """State of one interactive session: history, builtins and I/O."""

    def __init__(self, reader=None, out=None, history=None, builtins=None,
                 executor=run_external, prompt=prompt):
        self.out = out or sys.stdout
        self.history = history if history is not None else HistoryStore(MAX_HISTORY)
        self.builtins = builtins if builtins is not None else BuiltinTable()
        self.executor = executor
        self.prompt = prompt
        self.editor = LineEditor(reader or KeyReader(), self.history,
                                 prompt, out=self.out)
        self.last_status = 0

    def dispatch(self, args):
        """
        Run a tokenized command, builtin first, external otherwise.
        Returns: exit_code
        """
        if not args:
            return self.last_status

        executed, exit_code = execute_builtin(self, args)
        if not executed:
            exit_code = self.executor(args, out=self.out)
        self.last_status = exit_code
        return exit_code

    def run(self):
        """Main shell loop; returns when input ends"""
        while True:
            self.out.write(self.prompt())
            self.out.flush()

            line = self.editor.read_line()
            if line is None:
                self.out.write("\n")
                self.out.flush()
                return 0

            if not line:
                continue

            self.history.record(line)
            try:
                self.dispatch(tokenize(line))
            except KeyboardInterrupt:
                # Ctrl+C while a command runs never ends the shell
                self.out.write("\n")
                self.out.flush()


def build_parser():
    parser = argparse.ArgumentParser(prog="byteshell",
                                     description="Interactive raw-mode shell")
    parser.add_argument("--no-banner", action="store_true",
                        help="do not print the welcome banner")
    parser.add_argument("--version", action="version",
                        version=f"ByteShell v{VERSION}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    with raw_mode():
        session = ShellSession()
        session.history.load(HISTORY_FILE)
        try:
            if not args.no_banner:
                session.out.write(banner())
                session.out.flush()
            return session.run()
        finally:
            session.history.save(HISTORY_FILE)


if __name__ == "__main__":
    sys.exit(main())
