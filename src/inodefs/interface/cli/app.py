from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: configuration loading and merging
(defaults, persisted file, CLI overrides), logging bootstrap, session
construction and the command loop.
"""

import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from inodefs.core.filesystem.state import FilesystemState
from inodefs.core.shell.session import ShellSession
from inodefs.core.shell.validator import validate_config
from inodefs.domain.config import get_default_config, get_config_path, load_config, save_config
from inodefs.domain.constants import APP_NAME
from inodefs.infra.logging import LoggingConfig, configure_logging, get_logger
from inodefs.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_USAGE = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: The session exit status, or 2 when the script cannot be opened.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve base configuration (Default vs Persistent state)
    if args.use_defaults:
        base_conf = get_default_config()
    else:
        base_conf = load_config(args.config_path)

    # 3. Merge command-line overrides and validate
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)

    # 4. Logging bootstrap
    configure_logging(LoggingConfig(
        level=conf["log_level"],
        console=True,
        log_file=conf["log_file"] or None,
        debug_flags=conf["debug_flags"],
    ))

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return 0

    if args.save_config:
        target = args.config_path or get_config_path()
        save_config(conf, target)
        print(f"Configuration saved to {target}")
        return 0

    # 5. Session execution phase
    if args.script:
        try:
            with open(args.script, "r", encoding="utf-8") as stream:
                return _run_session(conf, stream)
        except OSError as e:
            logger.error(f"Cannot open script '{args.script}': {e}")
            print(f"{APP_NAME}: {args.script}: {e.strerror}", file=sys.stderr)
            return EXIT_USAGE

    return _run_session(conf, sys.stdin)

# -----------------------------------------------------------------------------
# SESSION WIRING
# -----------------------------------------------------------------------------

def _run_session(conf: Dict[str, Any], stream: TextIO) -> int:
    """Build a fresh filesystem and run the command loop over stream."""
    state = FilesystemState(prompt=conf["prompt"])
    session = ShellSession(
        state,
        show_prompt=conf["show_prompt"],
        echo=_resolve_echo(conf["echo_mode"], stream),
    )
    logger.debug(f"Session started: {state!r}")
    return session.run(stream)


def _resolve_echo(mode: str, stream: TextIO) -> bool:
    """Echo input lines unless they come from an interactive terminal."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    isatty = getattr(stream, "isatty", None)
    return not (isatty and isatty())

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only non-None overrides replace base values.
    """
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
