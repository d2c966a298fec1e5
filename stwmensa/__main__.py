import argparse, asyncio, json, logging, sys
from datetime import date

import aiohttp
import voluptuous as vol

from .config import load_config
from .const import CONF_URL, CONF_MENSA_ID, CONF_TIMEOUT, CONF_TIMEZONE, CONF_LOG_LEVEL
from .menu import Mensa, MenuError
from .server import parse_date, run, today

log = logging.getLogger(__name__)


def _argDate(value: str) -> date:
    try:
        return parse_date(value)
    except vol.Invalid as err:
        raise argparse.ArgumentTypeError(str(err)) from err


def buildParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stwmensa", description="Berlin mensa menus as JSON")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the HTTP service")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)

    fetch = sub.add_parser("fetch", help="print one menu and exit")
    fetch.add_argument("--date", type=_argDate, help="YYYY-MM-DD, default today")
    fetch.add_argument("--mensa", help="resources_id of the mensa")

    return parser


async def fetchMenu(config: dict, mensaId: str, menuDate: date) -> dict:
    mensa = Mensa(asyncio.to_thread, url=config[CONF_URL], timeout=config[CONF_TIMEOUT])
    async with aiohttp.ClientSession() as session:
        menu = await mensa.loadMenu(session, mensaId, menuDate)
        return menu.toJson()


def main(argv=None) -> int:
    args = buildParser().parse_args(argv)

    try:
        if args.command == "serve":
            config = load_config(host=args.host, port=args.port)
        else:
            config = load_config(mensa_id=args.mensa)
    except vol.Invalid as err:
        print(f"Invalid configuration: {err}", file=sys.stderr)
        return 2

    logging.basicConfig(level=config[CONF_LOG_LEVEL])

    if args.command == "serve":
        run(config)
        return 0

    menuDate = args.date or today(config[CONF_TIMEZONE])
    try:
        data = asyncio.run(fetchMenu(config, config[CONF_MENSA_ID], menuDate))
    except MenuError as err:
        log.error(f"Failed to load menu for {menuDate}: {err}")
        return 1

    print(json.dumps(data, indent=4, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
