from __future__ import annotations

"""
Unit tests for the shell command handlers.

Verifies:
1. The build-and-list, cd/pwd and cat scenarios.
2. Operand validation (usage errors) per command.
3. Recursive listing and removal of trees deeper than the recursion limit.
4. Removal rules, including the guard protecting the current directory.
"""

import io

import pytest

from inodefs.core.filesystem.resolver import resolve_path
from inodefs.core.filesystem.state import FilesystemState
from inodefs.core.shell import commands
from inodefs.domain.errors import (
    AlreadyExistsError,
    CommandError,
    KindMismatchError,
    NotEmptyError,
    PathNotFoundError,
    ShellExit,
)


def _lines(out: io.StringIO):
    return out.getvalue().splitlines()


# Deeper than the interpreter's default recursion limit
DEEP_TREE_DEPTH = 1200


def _build_chain(state: FilesystemState, depth: int):
    """Nest directories named 'd' below the root; return the deepest one."""
    node = state.root_directory()
    for _ in range(depth):
        node = node.make_child_directory("d")
    return node


# -----------------------------------------------------------------------------
# SCENARIOS
# -----------------------------------------------------------------------------

def test_build_and_list(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    commands.fn_make(fs_state, ["make", "a/f", "hello", "world"], out)
    commands.fn_ls(fs_state, ["ls", "a"], out)

    assert _lines(out) == [
        "/a:",
        "    2      3  .",
        "    1      3  ..",
        "    3      2  f",
    ]


def test_cd_and_pwd(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    commands.fn_cd(fs_state, ["cd", "a"], out)
    commands.fn_pwd(fs_state, ["pwd"], out)

    assert _lines(out) == ["/a"]


def test_pwd_at_root(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_pwd(fs_state, ["pwd"], out)
    assert _lines(out) == ["/"]


def test_cat_directory_raises(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    with pytest.raises(KindMismatchError, match="directory"):
        commands.fn_cat(fs_state, ["cat", "a"], out)


def test_cat_prints_each_file(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_make(fs_state, ["make", "f", "one", "two"], out)
    commands.fn_make(fs_state, ["make", "/g", "three"], out)
    commands.fn_cat(fs_state, ["cat", "f", "/g"], out)

    assert _lines(out) == ["one two", "three"]


def test_cat_requires_operand(fs_state: FilesystemState, out: io.StringIO):
    with pytest.raises(CommandError, match="cat: too few operands"):
        commands.fn_cat(fs_state, ["cat"], out)


# -----------------------------------------------------------------------------
# NAVIGATION
# -----------------------------------------------------------------------------

def test_cd_without_operand_returns_to_root(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    commands.fn_cd(fs_state, ["cd", "a"], out)
    commands.fn_cd(fs_state, ["cd"], out)

    assert fs_state.current_directory() is fs_state.root_directory()


def test_cd_dotdot(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    commands.fn_mkdir(fs_state, ["mkdir", "a/b"], out)
    commands.fn_cd(fs_state, ["cd", "/a/b"], out)
    commands.fn_cd(fs_state, ["cd", ".."], out)
    commands.fn_pwd(fs_state, ["pwd"], out)

    assert _lines(out) == ["/a"]


def test_cd_into_plain_file_is_refused(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_make(fs_state, ["make", "f"], out)
    with pytest.raises(KindMismatchError, match="is a plain file"):
        commands.fn_cd(fs_state, ["cd", "f"], out)
    assert fs_state.current_directory() is fs_state.root_directory()


def test_cd_missing_path(fs_state: FilesystemState, out: io.StringIO):
    with pytest.raises(PathNotFoundError):
        commands.fn_cd(fs_state, ["cd", "nowhere"], out)


def test_cd_too_many_operands(fs_state: FilesystemState, out: io.StringIO):
    with pytest.raises(CommandError, match="too many operands"):
        commands.fn_cd(fs_state, ["cd", "a", "b"], out)


def test_ls_defaults_to_cwd(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_ls(fs_state, ["ls"], out)
    assert _lines(out) == ["/:", "    1      2  .", "    1      2  .."]


def test_ls_plain_file_prints_contents(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_make(fs_state, ["make", "f", "x", "y"], out)
    commands.fn_ls(fs_state, ["ls", "f"], out)
    assert _lines(out) == ["x y"]


def test_lsr_walks_subdirectories(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    commands.fn_mkdir(fs_state, ["mkdir", "a/b"], out)
    commands.fn_make(fs_state, ["make", "a/f", "x"], out)
    commands.fn_lsr(fs_state, ["lsr", "/"], out)

    headers = [line for line in _lines(out) if line.endswith(":")]
    assert headers == ["/:", "/a:", "/b:"]


def test_lsr_visits_siblings_in_table_order(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "c"], out)
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    commands.fn_mkdir(fs_state, ["mkdir", "a/b"], out)
    commands.fn_lsr(fs_state, ["lsr", "/"], out)

    headers = [line for line in _lines(out) if line.endswith(":")]
    assert headers == ["/:", "/a:", "/b:", "/c:"]


def test_lsr_handles_trees_deeper_than_recursion_limit(fs_state: FilesystemState, out: io.StringIO):
    _build_chain(fs_state, DEEP_TREE_DEPTH)
    commands.fn_lsr(fs_state, ["lsr", "/"], out)

    headers = [line for line in _lines(out) if line.endswith(":")]
    assert len(headers) == DEEP_TREE_DEPTH + 1
    assert headers[:2] == ["/:", "/d:"]


# -----------------------------------------------------------------------------
# CREATION
# -----------------------------------------------------------------------------

def test_make_overwrites_existing_file(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_make(fs_state, ["make", "f", "old", "words"], out)
    commands.fn_make(fs_state, ["make", "f", "new"], out)

    assert resolve_path(fs_state, "f").read() == ["new"]


def test_make_on_directory_fails_after_reopen(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    with pytest.raises(KindMismatchError, match="is a directory"):
        commands.fn_make(fs_state, ["make", "a", "text"], out)


def test_make_in_missing_directory(fs_state: FilesystemState, out: io.StringIO):
    with pytest.raises(PathNotFoundError):
        commands.fn_make(fs_state, ["make", "/x/f"], out)


@pytest.mark.parametrize("words, message", [
    (["make"], "make: missing operands"),
    (["make", "/"], "make: missing entry name"),
])
def test_make_usage_errors(fs_state: FilesystemState, out: io.StringIO, words, message):
    with pytest.raises(CommandError, match=message):
        commands.fn_make(fs_state, words, out)


def test_mkdir_twice_raises(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    with pytest.raises(AlreadyExistsError):
        commands.fn_mkdir(fs_state, ["mkdir", "a"], out)


@pytest.mark.parametrize("words, message", [
    (["mkdir"], "missing operand"),
    (["mkdir", "a", "b"], "only one operand allowed"),
])
def test_mkdir_usage_errors(fs_state: FilesystemState, out: io.StringIO, words, message):
    with pytest.raises(CommandError, match=message):
        commands.fn_mkdir(fs_state, words, out)


def test_mkdir_sets_parent_link(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    commands.fn_mkdir(fs_state, ["mkdir", "/a/b"], out)
    b = resolve_path(fs_state, "/a/b")

    assert b.parent() is resolve_path(fs_state, "/a")


# -----------------------------------------------------------------------------
# REMOVAL
# -----------------------------------------------------------------------------

def test_rm_file_and_empty_directory(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_make(fs_state, ["make", "f"], out)
    commands.fn_mkdir(fs_state, ["mkdir", "d"], out)
    commands.fn_rm(fs_state, ["rm", "f", "/d"], out)

    assert fs_state.root_directory().child_names() == [".", ".."]


def test_rm_non_empty_directory(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "d"], out)
    commands.fn_make(fs_state, ["make", "d/f"], out)
    with pytest.raises(NotEmptyError):
        commands.fn_rm(fs_state, ["rm", "d"], out)


def test_rm_missing_path(fs_state: FilesystemState, out: io.StringIO):
    with pytest.raises(PathNotFoundError):
        commands.fn_rm(fs_state, ["rm", "ghost"], out)


@pytest.mark.parametrize("path", ["/", "/a/..", "."])
def test_rm_refuses_root_and_reserved(fs_state: FilesystemState, out: io.StringIO, path):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    with pytest.raises(CommandError):
        commands.fn_rm(fs_state, ["rm", path], out)


def test_rm_refuses_directory_on_cwd_path(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    commands.fn_mkdir(fs_state, ["mkdir", "a/b"], out)
    commands.fn_cd(fs_state, ["cd", "a/b"], out)

    with pytest.raises(CommandError, match="in use"):
        commands.fn_rm(fs_state, ["rm", "/a/b"], out)
    with pytest.raises(CommandError, match="in use"):
        commands.fn_rmr(fs_state, ["rmr", "/a"], out)


def test_rmr_removes_subtree(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_mkdir(fs_state, ["mkdir", "a"], out)
    commands.fn_mkdir(fs_state, ["mkdir", "a/b"], out)
    commands.fn_make(fs_state, ["make", "a/b/f", "x"], out)
    commands.fn_make(fs_state, ["make", "a/g"], out)
    b = resolve_path(fs_state, "/a/b")

    commands.fn_rmr(fs_state, ["rmr", "a"], out)

    assert fs_state.root_directory().child_names() == [".", ".."]
    assert b.find_child("..") is None


def test_rmr_handles_trees_deeper_than_recursion_limit(fs_state: FilesystemState, out: io.StringIO):
    deepest = _build_chain(fs_state, DEEP_TREE_DEPTH)
    deepest.make_child_file("leaf").write(["x"])

    commands.fn_rmr(fs_state, ["rmr", "/d"], out)

    assert fs_state.root_directory().child_names() == [".", ".."]
    assert deepest.find_child("..") is None


def test_rm_requires_operand(fs_state: FilesystemState, out: io.StringIO):
    with pytest.raises(CommandError, match="rm: missing operand"):
        commands.fn_rm(fs_state, ["rm"], out)
    with pytest.raises(CommandError, match="rmr: missing operand"):
        commands.fn_rmr(fs_state, ["rmr"], out)


# -----------------------------------------------------------------------------
# SESSION CONTROL
# -----------------------------------------------------------------------------

def test_echo(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_echo(fs_state, ["echo", "a", "b"], out)
    commands.fn_echo(fs_state, ["echo"], out)
    assert _lines(out) == ["a b", ""]


def test_prompt(fs_state: FilesystemState, out: io.StringIO):
    commands.fn_prompt(fs_state, ["prompt", "hi", "there"], out)
    assert fs_state.prompt_text() == "hi there "

    commands.fn_prompt(fs_state, ["prompt"], out)
    assert fs_state.prompt_text() == "hi there "


@pytest.mark.parametrize("words, status", [
    (["exit"], 0),
    (["exit", "3"], 3),
    (["exit", "abc"], 127),
    (["exit", "-1"], 127),
    (["exit", "²"], 127),
])
def test_exit_status(fs_state: FilesystemState, out: io.StringIO, words, status):
    with pytest.raises(ShellExit) as exc_info:
        commands.fn_exit(fs_state, words, out)
    assert exc_info.value.status == status
