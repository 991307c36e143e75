"""Runtime configuration and environment parsing helpers."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def _normalize_text_value(raw_value) -> str:
    """
    Normalize a free-form text value:
    - trim leading/trailing whitespace
    - strip one pair of matching surrounding quotes ('...' or "...")
    """
    if raw_value is None:
        return ""
    text = str(raw_value).strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in {"'", '"'}:
        text = text[1:-1].strip()
    return text


def _parse_env_bool(raw_value: str | None, default: bool = False) -> bool:
    if raw_value is None or str(raw_value).strip() == "":
        return default
    value = _normalize_text_value(raw_value).lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    logger.warning(f"Invalid boolean value '{raw_value}'. Using default {default}.")
    return default


def _read_env_int(var_name: str, default: int, minimum: int | None = None) -> int:
    raw_value = os.getenv(var_name)
    if raw_value is None or str(raw_value).strip() == "":
        return default
    try:
        value = int(_normalize_text_value(raw_value))
    except (TypeError, ValueError):
        logger.warning(
            f"Invalid integer value for {var_name}: {raw_value}. Using default {default}."
        )
        return default
    if minimum is not None and value < minimum:
        logger.warning(
            f"Value for {var_name} must be >= {minimum}. Using default {default}."
        )
        return default
    return value


def _ovirt_verify_ssl() -> bool:
    return _parse_env_bool(os.getenv("OVIRT_VERIFY_SSL"), default=True)


def _ovirt_timeout_seconds() -> int:
    return _read_env_int("OVIRT_TIMEOUT", default=DEFAULT_TIMEOUT, minimum=1)


def _debug_transport() -> bool:
    return _parse_env_bool(os.getenv("DEBUG_TRANSPORT"), default=False)


def load_runtime_config():
    """
    Build runtime config from environment variables only.

    Missing values are left empty; callers decide which ones are required.
    """
    ovirt_cfg = {
        "URL": _normalize_text_value(os.getenv("OVIRT_URL")).rstrip("/"),
        "USERNAME": _normalize_text_value(os.getenv("OVIRT_USERNAME")),
        "PASSWORD": _normalize_text_value(os.getenv("OVIRT_PASSWORD")),
        "CA_FILE": _normalize_text_value(os.getenv("OVIRT_CA_FILE")) or None,
        "VERIFY_SSL": _ovirt_verify_ssl(),
        "TIMEOUT": _ovirt_timeout_seconds(),
        "DEBUG_TRANSPORT": _debug_transport(),
    }

    if ovirt_cfg["CA_FILE"] and not os.path.exists(ovirt_cfg["CA_FILE"]):
        raise ValueError(f"OVIRT_CA_FILE points to a missing file: {ovirt_cfg['CA_FILE']}")

    if ovirt_cfg["URL"] and not ovirt_cfg["URL"].startswith(("http://", "https://")):
        raise ValueError("OVIRT_URL must start with http:// or https://")

    return {"OVIRT": ovirt_cfg}
