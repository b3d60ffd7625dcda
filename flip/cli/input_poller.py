"""Line input that can be polled without blocking the render loop."""
from __future__ import annotations

import os
import sys
import time
from typing import List, Optional

# stdin closing ends the session the same way typing /quit does
EOF_LINE = "/quit"


class InputPoller:
    """
    poll_line() returns a complete, stripped line once one is available and
    None if nothing arrives within timeout_sec.

    On Unix stdin is waited on with select. The Windows console has no
    selectable stdin, so keystrokes are read one at a time through msvcrt and
    echoed back by hand.
    """

    def __init__(self) -> None:
        self._pending: List[str] = []
        if os.name == "nt":
            import msvcrt  # type: ignore
            self._msvcrt = msvcrt
            self._poll = self._poll_console
        else:
            import select
            self._select = select
            self._poll = self._poll_stdin

    def poll_line(self, timeout_sec: float = 1.0) -> Optional[str]:
        return self._poll(timeout_sec)

    def _poll_stdin(self, timeout_sec: float) -> Optional[str]:
        ready, _, _ = self._select.select([sys.stdin], [], [], timeout_sec)
        if not ready:
            return None
        line = sys.stdin.readline()
        return line.strip() if line else EOF_LINE

    def _poll_console(self, timeout_sec: float) -> Optional[str]:
        deadline = time.monotonic() + timeout_sec
        while time.monotonic() < deadline:
            while self._msvcrt.kbhit():
                line = self.feed(self._msvcrt.getwch())
                if line is not None:
                    return line
            time.sleep(0.02)
        return None

    def feed(self, ch: str) -> Optional[str]:
        """Add one typed character; returns the line when ch ends it."""
        if ch in ("\r", "\n"):
            line = "".join(self._pending).strip()
            self._pending.clear()
            self._echo("\n")
            return line
        if ch == "\b":
            if self._pending:
                self._pending.pop()
                self._echo("\b \b")
            return None
        self._pending.append(ch)
        self._echo(ch)
        return None

    @staticmethod
    def _echo(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()
