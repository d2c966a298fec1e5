"""HTTP service exposing the mensa menu as JSON."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Any

import aiohttp
import voluptuous as vol
from aiohttp import web
from dateutil import tz

from .config import load_config
from .const import (
    CONF_HOST,
    CONF_PORT,
    CONF_URL,
    CONF_MENSA_ID,
    CONF_TIMEOUT,
    CONF_TIMEZONE,
    QUERY_DATE,
    QUERY_MENSA,
)
from .menu import Mensa, MenuError

_LOGGER = logging.getLogger(__name__)

CONFIG_KEY = web.AppKey("config", dict)
MENSA_KEY = web.AppKey("mensa", Mensa)
SESSION_KEY = web.AppKey("session", aiohttp.ClientSession)


def parse_date(value: Any) -> date:
    """Convert a YYYY-MM-DD string to a date."""
    try:
        return datetime.strptime(str(value), "%Y-%m-%d").date()
    except ValueError as err:
        raise vol.Invalid(f"invalid date {value!r}, expected YYYY-MM-DD") from err


def today(timezone: str) -> date:
    return datetime.now(tz.gettz(timezone)).date()


def query_schema(config: dict[str, Any]) -> vol.Schema:
    return vol.Schema(
        {
            vol.Optional(QUERY_DATE): parse_date,
            vol.Optional(QUERY_MENSA, default=config[CONF_MENSA_ID]): vol.All(str, vol.Strip, vol.Length(min=1)),
        },
        extra=vol.REMOVE_EXTRA,
    )


async def retrieve_menu(request: web.Request) -> web.Response:
    config = request.app[CONFIG_KEY]

    try:
        query = query_schema(config)(dict(request.query))
    except vol.Invalid as err:
        raise web.HTTPBadRequest(text=f"Failed to deserialize query string: {err}") from err

    menu_date = query.get(QUERY_DATE) or today(config[CONF_TIMEZONE])
    _LOGGER.info("loading menu for %s", menu_date)

    mensa = request.app[MENSA_KEY]
    try:
        menu = await mensa.loadMenu(request.app[SESSION_KEY], query[QUERY_MENSA], menu_date)
    except MenuError as err:
        _LOGGER.warning("No menu for mensa %s on %s: %s", query[QUERY_MENSA], menu_date, err)
        raise web.HTTPNotFound(text=str(err)) from err

    return web.json_response(menu.toJson())


async def _client_session(app: web.Application):
    async with aiohttp.ClientSession() as session:
        app[SESSION_KEY] = session
        yield


def create_app(config: dict[str, Any] | None = None, asyncExecutor=asyncio.to_thread) -> web.Application:
    if config is None:
        config = load_config()

    app = web.Application()
    app[CONFIG_KEY] = config
    app[MENSA_KEY] = Mensa(asyncExecutor, url=config[CONF_URL], timeout=config[CONF_TIMEOUT])
    app.cleanup_ctx.append(_client_session)
    app.router.add_get("/menu", retrieve_menu)
    return app


def run(config: dict[str, Any]) -> None:
    _LOGGER.info("Starting mensa service on %s:%s", config[CONF_HOST], config[CONF_PORT])
    web.run_app(create_app(config), host=config[CONF_HOST], port=config[CONF_PORT], print=None)
