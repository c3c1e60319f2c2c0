import os
import sys
from collections import deque
from enum import Enum

from byteshell.config import MAX_HISTORY


class Direction(Enum):
    OLDER = -1
    NEWER = 1


# navigate() results that are not history entries
NO_CHANGE = object()
AT_END = object()


class HistoryStore:
    """
    Bounded list of accepted command lines with an up/down cursor.

    Only a repeat of the newest entry is dropped; older duplicates are kept.
    The cursor runs from 0 to len(self), where len(self) means no entry
    is selected.
    """

    def __init__(self, capacity=MAX_HISTORY):
        if capacity < 1:
            raise ValueError("history capacity must be at least 1")
        self.capacity = capacity
        self._entries = deque(maxlen=capacity)
        self.cursor = 0

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    @property
    def entries(self):
        return list(self._entries)

    def record(self, line):
        """Thêm command vào history"""
        if not line:
            return
        if self._entries and self._entries[-1] == line:
            return
        # deque drops the oldest entry once maxlen is reached
        self._entries.append(line)
        self.reset_cursor()

    def reset_cursor(self):
        self.cursor = len(self._entries)

    def navigate(self, direction):
        """
        Move the cursor one step.
        Returns: the selected entry, NO_CHANGE when already at the oldest
        entry, or AT_END when there is nothing newer
        """
        new_pos = self.cursor + direction.value
        if 0 <= new_pos < len(self._entries):
            self.cursor = new_pos
            return self._entries[new_pos]
        if direction is Direction.NEWER:
            return AT_END
        return NO_CHANGE

    def show(self, out=None):
        """In ra toàn bộ history"""
        out = out or sys.stdout
        out.write("\nCommand History:\n")
        out.write("================\n")
        for i, line in enumerate(self._entries, 1):
            out.write(f"{i:4d}  {line}\n")
        out.write("\n")
        out.flush()

    def load(self, path):
        """Load history từ file"""
        if not path:
            return
        try:
            if os.path.exists(path):
                with open(path, encoding="utf-8") as f:
                    for line in f:
                        self.record(line.rstrip("\n"))
        except (OSError, UnicodeDecodeError) as e:
            print(f"Warning: Could not load history: {e}", file=sys.stderr)

    def save(self, path):
        """Lưu history ra file"""
        if not path:
            return
        try:
            with open(path, "w", encoding="utf-8") as f:
                for line in self._entries:
                    f.write(line + "\n")
        except OSError as e:
            print(f"Warning: Could not save history: {e}", file=sys.stderr)
