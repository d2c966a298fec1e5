"""Service configuration, read from MENSA_* environment variables."""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping

import voluptuous as vol
from dateutil import tz
from yarl import URL

from .const import (
    CONF_HOST,
    CONF_PORT,
    CONF_URL,
    CONF_MENSA_ID,
    CONF_TIMEOUT,
    CONF_TIMEZONE,
    CONF_LOG_LEVEL,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_MENSA_ID,
    DEFAULT_TIMEOUT,
    DEFAULT_TIMEZONE,
    DEFAULT_LOG_LEVEL,
    MENU_URL,
)

ENV_KEYS = {
    CONF_HOST: "MENSA_HOST",
    CONF_PORT: "MENSA_PORT",
    CONF_URL: "MENSA_URL",
    CONF_MENSA_ID: "MENSA_DEFAULT_ID",
    CONF_TIMEOUT: "MENSA_TIMEOUT",
    CONF_TIMEZONE: "MENSA_TIMEZONE",
    CONF_LOG_LEVEL: "MENSA_LOG_LEVEL",
}


def _valid_url(value: Any) -> str:
    """Validate an absolute http(s) URL using yarl."""
    try:
        url = URL(str(value).strip())
    except (TypeError, ValueError) as err:
        raise vol.Invalid(f"invalid url {value!r}") from err

    if not url.is_absolute() or url.scheme not in ("http", "https"):
        raise vol.Invalid(f"url must be absolute http(s): {value!r}")
    return str(url)


def _valid_timezone(value: Any) -> str:
    if tz.gettz(str(value)) is None:
        raise vol.Invalid(f"unknown timezone {value!r}")
    return str(value)


def _valid_log_level(value: Any) -> str:
    level = str(value).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise vol.Invalid(f"unknown log level {value!r}")
    return level


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_HOST, default=DEFAULT_HOST): vol.All(str, vol.Length(min=1)),
        vol.Optional(CONF_PORT, default=DEFAULT_PORT): vol.All(vol.Coerce(int), vol.Range(min=1, max=65535)),
        vol.Optional(CONF_URL, default=MENU_URL): _valid_url,
        vol.Optional(CONF_MENSA_ID, default=DEFAULT_MENSA_ID): vol.All(str, vol.Strip, vol.Length(min=1)),
        vol.Optional(CONF_TIMEOUT, default=DEFAULT_TIMEOUT): vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False)),
        vol.Optional(CONF_TIMEZONE, default=DEFAULT_TIMEZONE): _valid_timezone,
        vol.Optional(CONF_LOG_LEVEL, default=DEFAULT_LOG_LEVEL): _valid_log_level,
    }
)


def load_config(environ: Mapping[str, str] | None = None, **overrides) -> dict[str, Any]:
    """Build the validated config from the environment; keyword overrides win.

    Raises vol.Invalid when a value does not validate.
    """
    if environ is None:
        environ = os.environ

    raw: dict[str, Any] = {}
    for key, env_key in ENV_KEYS.items():
        value = environ.get(env_key)
        if value is not None and value.strip():
            raw[key] = value.strip()

    # cli arguments, only when actually given
    raw.update({k: v for k, v in overrides.items() if v is not None})

    return CONFIG_SCHEMA(raw)
