"""
Runtime settings for the HTTP backend.

Defaults live in ``DEFAULT_SETTINGS``; each can be overridden with an
environment variable named ``LINSOLVER_<KEY>`` (e.g.
``LINSOLVER_HISTORY_LIMIT=20``).
"""

import logging
import os

logger = logging.getLogger(__name__)

_PROJECT_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "..")
_ENV_PREFIX = "LINSOLVER_"

DEFAULT_SETTINGS = {
    "data_file": os.path.join(_PROJECT_DIR, "data", "linsolver.json"),
    "history_limit": 50,       # records returned by GET /api/history
    "max_retries": 3,          # extra attempts to open the history store
    "retry_delay_ms": 1000,    # first backoff delay, doubled per attempt
    "cors_origins": ["*"],
}


def _int_setting(key: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s%s=%r: not an integer", _ENV_PREFIX, key.upper(), raw)
        return DEFAULT_SETTINGS[key]
    if value < 0:
        logger.warning("Ignoring %s%s=%r: must not be negative", _ENV_PREFIX, key.upper(), raw)
        return DEFAULT_SETTINGS[key]
    return value


def load_settings(environ=None) -> dict:
    """Return the defaults merged with any ``LINSOLVER_*`` overrides."""
    environ = os.environ if environ is None else environ
    settings = dict(DEFAULT_SETTINGS)
    for key, default in DEFAULT_SETTINGS.items():
        raw = environ.get(_ENV_PREFIX + key.upper())
        if raw is None or not raw.strip():
            continue
        if isinstance(default, int):
            settings[key] = _int_setting(key, raw.strip())
        elif isinstance(default, list):
            settings[key] = [part.strip() for part in raw.split(",") if part.strip()]
        else:
            settings[key] = raw.strip()
    return settings
