from __future__ import annotations

"""
Shell Command Handlers.

Each handler receives the session state, the full word vector of the
command line (words[0] is the command name) and the output stream.
Handlers validate their operands, resolve paths and call into the
filesystem core. Every failure is raised; the session loop reports it.
"""

import logging
from typing import List, TextIO, Tuple

from inodefs.core.filesystem.inode import Node
from inodefs.core.filesystem.resolver import absolute_path, resolve, resolve_path, split_path
from inodefs.core.filesystem.state import FilesystemState
from inodefs.domain.constants import EXIT_STATUS_BAD_OPERAND, RESERVED_ENTRIES
from inodefs.domain.errors import CommandError, KindMismatchError, ShellExit
from inodefs.domain.node_models import Wordvec

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# FILE CONTENT
# -----------------------------------------------------------------------------

def fn_cat(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    """Print the tokens of each plain file operand."""
    logger.debug(f"{state!r} {words}")
    if len(words) < 2:
        raise CommandError("cat: too few operands")

    for path in words[1:]:
        node = resolve_path(state, path)
        print(" ".join(node.read()), file=out)


def fn_make(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    """
    Create (or re-open) a plain file and replace its contents.

    Creation and the write are separate steps: a failing write leaves the
    newly created file in place.
    """
    logger.debug(f"{state!r} {words}")
    if len(words) < 2:
        raise CommandError("make: missing operands")

    parent, name = _resolve_parent(state, words[1], "make")
    node = parent.make_child_file(name)
    node.write(words[2:])


def fn_echo(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    print(" ".join(words[1:]), file=out)


# -----------------------------------------------------------------------------
# NAVIGATION
# -----------------------------------------------------------------------------

def fn_cd(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    """Change the current directory; no operand returns to the root."""
    logger.debug(f"{state!r} {words}")
    if len(words) > 2:
        raise CommandError("cd: too many operands")

    if len(words) == 1:
        state.set_directory(state.root_directory())
        return

    destination = resolve_path(state, words[1])
    if not destination.is_directory:
        raise KindMismatchError(f"{words[1]}: is a plain file")
    state.set_directory(destination)


def fn_pwd(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    print(absolute_path(state, state.current_directory()), file=out)


def fn_ls(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    """List each operand, or the current directory when none is given."""
    logger.debug(f"{state!r} {words}")
    for node in _targets(state, words):
        print(node.to_text(), file=out)


def fn_lsr(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    """List each operand and, depth first, every directory below it."""
    logger.debug(f"{state!r} {words}")
    for node in _targets(state, words):
        _print_recursive(node, out)


# -----------------------------------------------------------------------------
# TREE MUTATION
# -----------------------------------------------------------------------------

def fn_mkdir(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    logger.debug(f"{state!r} {words}")
    if len(words) == 1:
        raise CommandError("mkdir: missing operand")
    if len(words) > 2:
        raise CommandError("mkdir: only one operand allowed")

    parent, name = _resolve_parent(state, words[1], "mkdir")
    parent.make_child_directory(name)


def fn_rm(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    """Remove plain files and empty directories."""
    logger.debug(f"{state!r} {words}")
    if len(words) < 2:
        raise CommandError("rm: missing operand")

    for path in words[1:]:
        parent, name = _resolve_removal(state, path, "rm")
        parent.remove(name)


def fn_rmr(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    """Remove each operand together with everything below it."""
    logger.debug(f"{state!r} {words}")
    if len(words) < 2:
        raise CommandError("rmr: missing operand")

    for path in words[1:]:
        parent, name = _resolve_removal(state, path, "rmr")
        _remove_recursive(parent, name)


# -----------------------------------------------------------------------------
# SESSION CONTROL
# -----------------------------------------------------------------------------

def fn_prompt(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    if len(words) > 1:
        state.set_prompt(" ".join(words[1:]) + " ")


def fn_exit(state: FilesystemState, words: Wordvec, out: TextIO) -> None:
    """Stop the session. A non-numeric status operand becomes 127."""
    logger.debug(f"{state!r} {words}")
    status = 0
    if len(words) > 1:
        operand = words[1]
        status = int(operand) if operand.isascii() and operand.isdigit() else EXIT_STATUS_BAD_OPERAND
    raise ShellExit(status)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _targets(state: FilesystemState, words: Wordvec) -> List[Node]:
    if len(words) < 2:
        return [state.current_directory()]
    return [resolve_path(state, path) for path in words[1:]]


def _resolve_parent(state: FilesystemState, path: str, command: str) -> Tuple[Node, str]:
    """Resolve every segment but the last; the last one names the entry."""
    segments, from_root = split_path(path)
    if not segments:
        raise CommandError(f"{command}: missing entry name")

    parent = resolve(state, segments[:-1], from_root)
    return parent, segments[-1]


def _resolve_removal(state: FilesystemState, path: str, command: str) -> Tuple[Node, str]:
    """
    Resolve the parent of a removal target.

    The target itself must exist and must not be the root or lie on the
    path from the root to the current directory.
    """
    segments, from_root = split_path(path)
    if not segments:
        raise CommandError(f"{command}: cannot remove root directory")
    if segments[-1] in RESERVED_ENTRIES:
        raise CommandError(f"{command}: {path}: refusing to remove '.' or '..'")

    target = resolve(state, segments, from_root)
    if _on_cwd_path(state, target):
        raise CommandError(f"{command}: {path}: directory is in use")

    parent = resolve(state, segments[:-1], from_root)
    return parent, segments[-1]


def _on_cwd_path(state: FilesystemState, node: Node) -> bool:
    root = state.root_directory()
    position = state.current_directory()
    while True:
        if position is node:
            return True
        if position is root:
            return False
        position = position.parent()


def _remove_recursive(parent: Node, name: str) -> None:
    """Remove an entry and its subtree, deepest entries first."""
    pending: List[Tuple[Node, str]] = []
    stack: List[Tuple[Node, str]] = [(parent, name)]
    while stack:
        owner, entry = stack.pop()
        pending.append((owner, entry))
        target = owner.child_directory(entry)
        if target.is_directory:
            for child_name in _subentry_names(target):
                stack.append((target, child_name))

    # Pre-order reversed: every descendant goes before its ancestors
    for owner, entry in reversed(pending):
        owner.remove(entry)


def _print_recursive(node: Node, out: TextIO) -> None:
    """Print node, then every directory below it, depth first in table order."""
    stack: List[Node] = [node]
    while stack:
        current = stack.pop()
        print(current.to_text(), file=out)
        if not current.is_directory:
            continue

        children = [current.child_directory(n) for n in _subentry_names(current)]
        stack.extend(reversed([c for c in children if c.is_directory]))


def _subentry_names(node: Node) -> List[str]:
    return [n for n in node.child_names() if n not in RESERVED_ENTRIES]
