from __future__ import annotations

import importlib
import json

import pytest

from bgg_lookup.error_handling import ConfigurationError, UpstreamTransportError
from bgg_lookup.models import GameRecord
from tests.fakes import FakeResolver

cli = importlib.import_module("bgg_lookup.cli.main")

CATAN = GameRecord(external_id=13, name="Catan", year_published=1995, min_players=3, max_players=4,
                   rating=7.1, mechanics=("Dice Rolling",))


@pytest.fixture()
def log_file(tmp_path) -> str:
    return str(tmp_path / "cli.log")


def use_resolver(monkeypatch: pytest.MonkeyPatch, resolver: FakeResolver) -> None:
    monkeypatch.setattr(cli, "build_resolver", lambda backend: resolver)


def test_search_prints_table(monkeypatch, capsys, log_file) -> None:
    resolver = FakeResolver([CATAN])
    use_resolver(monkeypatch, resolver)

    assert cli.main(["--log-file", log_file, "search", "Catan", "Junior"]) == 0

    out = capsys.readouterr().out
    assert "Catan (1995)" in out
    assert "players 3-4" in out
    assert "mechanics: Dice Rolling" in out
    assert resolver.queries == ["Catan Junior"]


def test_details_prints_json(monkeypatch, capsys, log_file) -> None:
    resolver = FakeResolver([CATAN])
    use_resolver(monkeypatch, resolver)

    assert cli.main(["--log-file", log_file, "details", "13", "--json"]) == 0

    assert json.loads(capsys.readouterr().out) == [CATAN.to_dict()]
    assert resolver.id_batches == [[13]]


def test_lookup_failure_exits_nonzero(monkeypatch, capsys, log_file) -> None:
    use_resolver(monkeypatch, FakeResolver(error=UpstreamTransportError("boom")))

    assert cli.main(["--log-file", log_file, "search", "Catan"]) == 1
    assert "temporarily unavailable" in capsys.readouterr().err


def test_configuration_error_exits_2(monkeypatch, log_file) -> None:
    def fail(backend):
        raise ConfigurationError("no key")

    monkeypatch.setattr(cli, "build_resolver", fail)

    assert cli.main(["--log-file", log_file, "--backend", "ai", "search", "Catan"]) == 2
