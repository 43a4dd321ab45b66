from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (JSON file, CLI
overrides) and the session. Handles type coercion and default value
injection, collecting a warning for every repaired field.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from inodefs.domain.config import ECHO_MODES, get_default_config
from inodefs.infra.logging import DEBUG_FLAG_LOGGERS, LEVEL_NAMES

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    unknown = sorted(k for k in config if k not in defaults)
    for key in unknown:
        warnings.append(f"Unknown field '{key}' ignored.")

    # The prompt keeps its surrounding whitespace
    merged["prompt"] = _as_str(merged.get("prompt"), defaults["prompt"], "prompt", warnings, strict)
    merged["log_file"] = _as_str(merged.get("log_file"), defaults["log_file"], "log_file", warnings, strict).strip()

    merged["show_prompt"] = _as_bool(
        merged.get("show_prompt"), defaults["show_prompt"], "show_prompt", warnings, strict
    )

    merged["echo_mode"] = _as_choice(
        merged.get("echo_mode"), ECHO_MODES, defaults["echo_mode"], "echo_mode", warnings, strict
    )
    merged["log_level"] = _as_choice(
        merged.get("log_level"), LEVEL_NAMES, defaults["log_level"], "log_level", warnings, strict
    )

    merged["debug_flags"] = _normalize_debug_flags(
        _as_str(merged.get("debug_flags"), "", "debug_flags", warnings, strict),
        warnings,
        strict,
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate string inputs without altering their content."""
    if value is None:
        return fallback
    if isinstance(value, str):
        return value

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_choice(
        value: Any,
        choices: Sequence[str],
        fallback: str,
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Match a case-insensitive keyword against a closed set."""
    if value is None:
        return fallback

    if isinstance(value, str):
        for choice in choices:
            if value.strip().lower() == choice.lower():
                return choice

    msg = f"Invalid field '{field}': {value!r} is not one of {', '.join(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_debug_flags(flags: str, warnings: List[str], strict: bool) -> str:
    """Keep each known debug flag once, in first-seen order."""
    out: List[str] = []
    for flag in flags.strip():
        if flag not in DEBUG_FLAG_LOGGERS:
            msg = f"Unknown debug flag '{flag}'."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Flag discarded.")
            continue
        if flag not in out:
            out.append(flag)
    return "".join(out)
