from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from inodefs.domain.constants import APP_NAME

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the inodefs CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description="In-memory filesystem shell: ls, cd, mkdir, make, cat, pwd, rm.",
    )

    # --- Input ---
    p.add_argument(
        "script",
        nargs="?",
        default=None,
        help="File of shell commands to run. Reads standard input when omitted.",
    )

    # --- Session Behaviour ---
    p.add_argument(
        "--prompt",
        default=None,
        help="Initial prompt text.",
    )
    p.add_argument(
        "--no-prompt",
        action="store_true",
        help="Do not print the prompt before each command.",
    )
    echo = p.add_mutually_exclusive_group()
    echo.add_argument(
        "--echo",
        dest="echo_mode",
        action="store_const",
        const="always",
        default=None,
        help="Repeat every input line on standard output.",
    )
    echo.add_argument(
        "--no-echo",
        dest="echo_mode",
        action="store_const",
        const="never",
        help="Never repeat input lines (default: repeat when input is not a terminal).",
    )

    # --- Diagnostics ---
    p.add_argument(
        "-@", "--debug-flags",
        dest="debug_flags",
        default=None,
        help="Debug flags: 'i' filesystem core, 'c' commands, '@' everything.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )

    # --- Configuration ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Configuration file (default: per-user config.json).",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the stored configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Store the effective configuration (file plus flags) and exit.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset. None means "not given".
    """
    overrides: Dict[str, Any] = {}

    overrides["prompt"] = args.prompt
    overrides["echo_mode"] = args.echo_mode
    overrides["debug_flags"] = args.debug_flags
    overrides["log_file"] = args.log_file

    if args.no_prompt:
        overrides["show_prompt"] = False
    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
