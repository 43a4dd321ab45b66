from __future__ import annotations

"""
Interactive Shell Session.

Reads command lines from a text stream, dispatches them against one
FilesystemState and keeps the exit status bookkeeping. Errors raised
by a command are reported and the session continues; only the exit
command or the end of input stops the loop.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from inodefs.core.filesystem.state import FilesystemState
from inodefs.core.shell.dispatcher import dispatch
from inodefs.domain.constants import APP_NAME
from inodefs.domain.errors import CommandError, FileSystemError, PathNotFoundError, ShellExit

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"
EOF_MARKER = "^D"


@dataclass
class SessionStats:
    """Counters collected over one session."""
    commands: int = 0
    errors: int = 0


class ShellSession:
    """
    Line-oriented command loop.

    Args:
        state: Filesystem state the commands operate on.
        out: Stream for prompts, echoed input and command output.
        err: Stream for error reports.
        show_prompt: Print the prompt before reading each line.
        echo: Repeat every input line on the output stream.
        execname: Program name used as prefix of error reports.
    """

    def __init__(
            self,
            state: FilesystemState,
            *,
            out: Optional[TextIO] = None,
            err: Optional[TextIO] = None,
            show_prompt: bool = True,
            echo: bool = False,
            execname: str = APP_NAME,
    ):
        self.state = state
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.show_prompt = show_prompt
        self.echo = echo
        self.execname = execname
        self.exit_status = 0
        self.stats = SessionStats()

    def execute(self, line: str) -> bool:
        """
        Run a single input line.

        Returns:
            bool: False once the exit command has been executed.
        """
        words = line.split()
        if not words or words[0].startswith(COMMENT_PREFIX):
            return True

        self.stats.commands += 1
        try:
            dispatch(self.state, words, self.out)
        except ShellExit as e:
            logger.debug(f"exit requested with status {e.status}")
            self.exit_status = e.status
            return False
        except (CommandError, PathNotFoundError) as e:
            self._complain(str(e))
        except FileSystemError as e:
            self._complain(f"{words[0]}: {e}")
        return True

    def run(self, stream: TextIO) -> int:
        """
        Consume the stream until exit or end of input.

        Returns:
            int: The session exit status.
        """
        while True:
            if self.show_prompt:
                self.out.write(self.state.prompt_text())
                self.out.flush()

            line = stream.readline()
            if not line:
                if self.show_prompt:
                    print(EOF_MARKER, file=self.out)
                break

            line = line.rstrip("\r\n")
            if self.echo:
                print(line, file=self.out)

            if not self.execute(line):
                break

        logger.info(
            f"Session finished: {self.stats.commands} commands, "
            f"{self.stats.errors} errors, status {self.exit_status}"
        )
        print(f"{self.execname}: exit({self.exit_status})", file=self.out)
        self.out.flush()
        return self.exit_status

    def _complain(self, message: str) -> None:
        self.stats.errors += 1
        self.exit_status = 1
        logger.debug(f"command failed: {message}")
        print(f"{self.execname}: {message}", file=self.err)
        self.err.flush()
