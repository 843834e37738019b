from __future__ import annotations

import dataclasses

import pytest

from bgg_lookup.error_handling import (
    InputValidationError,
    UpstreamQuotaError,
    UpstreamTransportError,
    error_envelope,
    safe_execute,
)
from bgg_lookup.models import GameRecord


def test_safe_execute_returns_default_on_parse_error() -> None:
    assert safe_execute(int, "x", default_return=-1) == -1
    assert safe_execute(int, "12") == 12


def test_safe_execute_does_not_hide_other_errors() -> None:
    def broken(_):
        raise KeyError("bug")

    with pytest.raises(KeyError):
        safe_execute(broken, "x")


@pytest.mark.parametrize(
    ("exc", "status", "message"),
    [
        (InputValidationError("Provide query or bggIds"), 400, "Provide query or bggIds"),
        (UpstreamTransportError("HTTP 503 from thing", upstream_status=503), 500,
         "Board game search is temporarily unavailable"),
        (UpstreamQuotaError("credits gone"), 402, "AI search quota exhausted"),
        (ValueError("surprise"), 500, "Board game search is temporarily unavailable"),
    ],
)
def test_error_envelope(exc, status, message) -> None:
    assert error_envelope(exc) == (status, {"success": False, "error": message})


def test_game_record_is_immutable() -> None:
    record = GameRecord(external_id=13, name="Catan")

    with pytest.raises(dataclasses.FrozenInstanceError):
        record.name = "Settlers"  # type: ignore[misc]
