from __future__ import annotations

"""
Command Dispatch Table.

Maps command names to their handlers and runs a single tokenized
command line against the session state.
"""

import logging
from typing import Callable, Dict, TextIO

from inodefs.core.filesystem.state import FilesystemState
from inodefs.core.shell import commands
from inodefs.domain.errors import CommandError
from inodefs.domain.node_models import Wordvec

logger = logging.getLogger(__name__)

CommandFn = Callable[[FilesystemState, Wordvec, TextIO], None]

COMMANDS: Dict[str, CommandFn] = {
    "cat": commands.fn_cat,
    "cd": commands.fn_cd,
    "echo": commands.fn_echo,
    "exit": commands.fn_exit,
    "ls": commands.fn_ls,
    "lsr": commands.fn_lsr,
    "make": commands.fn_make,
    "mkdir": commands.fn_mkdir,
    "prompt": commands.fn_prompt,
    "pwd": commands.fn_pwd,
    "rm": commands.fn_rm,
    "rmr": commands.fn_rmr,
}


def find_command(name: str) -> CommandFn:
    """
    Look up a command handler.

    Raises:
        CommandError: If no command has that name.
    """
    fn = COMMANDS.get(name)
    if fn is None:
        raise CommandError(f"{name}: no such function")
    return fn


def dispatch(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    """Run one command line. words[0] is the command name."""
    if not words:
        return
    fn = find_command(words[0])
    logger.debug(f"dispatch {words[0]} -> {fn.__name__}")
    fn(state, words, out)
