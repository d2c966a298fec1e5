import json
from datetime import date

import pytest

import stwmensa.__main__ as cli
from stwmensa.const import CONF_MENSA_ID, CONF_PORT
from stwmensa.menu import RequestError


@pytest.fixture
def fetched(monkeypatch):
    calls = []

    async def fakeFetch(config, mensaId, menuDate):
        calls.append((mensaId, menuDate))
        return {"date": menuDate.isoformat(), "groups": [{"name": "Essen", "meals": []}]}

    monkeypatch.setattr(cli, "fetchMenu", fakeFetch)
    return calls


def test_fetch_prints_json(fetched, capsys):
    assert cli.main(["fetch", "--date", "2024-05-14", "--mensa", "321"]) == 0

    assert fetched == [("321", date(2024, 5, 14))]
    assert json.loads(capsys.readouterr().out) == {"date": "2024-05-14", "groups": [{"name": "Essen", "meals": []}]}


def test_fetch_defaults(fetched, monkeypatch):
    monkeypatch.delenv("MENSA_DEFAULT_ID", raising=False)
    monkeypatch.delenv("MENSA_TIMEZONE", raising=False)

    assert cli.main(["fetch"]) == 0
    assert fetched == [("322", cli.today("UTC"))]


def test_fetch_failure_exit_code(monkeypatch, capsys):

    async def failingFetch(config, mensaId, menuDate):
        raise RequestError("connection refused")

    monkeypatch.setattr(cli, "fetchMenu", failingFetch)

    assert cli.main(["fetch", "--date", "2024-05-14"]) == 1
    assert capsys.readouterr().out == ""


def test_bad_date_argument():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["fetch", "--date", "morgen"])
    assert excinfo.value.code == 2


def test_serve_uses_config(monkeypatch):
    started = []
    monkeypatch.setattr(cli, "run", started.append)
    monkeypatch.setenv("MENSA_DEFAULT_ID", "191")

    assert cli.main(["serve", "--port", "8081"]) == 0

    config, = started
    assert config[CONF_PORT] == 8081
    assert config[CONF_MENSA_ID] == "191"


def test_invalid_configuration(monkeypatch, capsys):
    monkeypatch.setenv("MENSA_URL", "nowhere")

    assert cli.main(["serve"]) == 2
    assert "Invalid configuration" in capsys.readouterr().err
