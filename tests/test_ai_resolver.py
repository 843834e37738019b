from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from bgg_lookup.error_handling import (
    ConfigurationError,
    InputValidationError,
    UpstreamFormatError,
    UpstreamQuotaError,
    UpstreamRateLimitError,
    UpstreamTransportError,
)
from bgg_lookup.resolvers import AiToolCallResolver, build_resolver
from bgg_lookup.resolvers.ai_tool_call import SEARCH_TOOL, TOOL_NAME
from tests.fakes import FakeResolver


class FakeAPIError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def tool_response(arguments, name: str = TOOL_NAME):
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    function = SimpleNamespace(name=name, arguments=arguments)
    message = SimpleNamespace(content=None, tool_calls=[SimpleNamespace(function=function)])
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_resolver(response=None, error: Exception | None = None, detail_resolver=None):
    client = MagicMock()
    if error is not None:
        client.chat.completions.create.side_effect = error
    else:
        client.chat.completions.create.return_value = response
    resolver = AiToolCallResolver(
        api_key="test-key",
        model_name="test-model",
        client=client,
        detail_resolver=detail_resolver or FakeResolver(),
    )
    return resolver, client


class TestAiToolCallResolver:
    def test_missing_api_key_fails_at_construction(self) -> None:
        with pytest.raises(ConfigurationError):
            AiToolCallResolver(api_key=None, client=MagicMock())

    def test_forces_the_search_tool(self) -> None:
        resolver, client = make_resolver(tool_response({"games": []}))

        resolver.resolve_games("Catan")

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["tools"] == [SEARCH_TOOL]
        assert kwargs["tool_choice"] == {"type": "function", "function": {"name": TOOL_NAME}}
        assert 'matching: "Catan"' in kwargs["messages"][-1]["content"]

    def test_games_are_normalized(self) -> None:
        games = [
            {
                "bggId": 13,
                "name": "Catan",
                "yearPublished": 1995,
                "minPlayers": 3,
                "maxPlayers": 4,
                "playingTime": 90,
                "rating": 7.1,
                "weight": 0,
                "categories": [],
                "mechanics": ["Dice Rolling"],
            },
            {"name": "No id"},
            {"bggId": 822, "name": "   "},
            {"bggId": 822.0, "name": "Carcassonne", "minAge": "seven"},
        ]
        resolver, _ = make_resolver(tool_response({"games": games}))

        records = resolver.resolve_games("Catan")

        assert [r.to_dict() for r in records] == [
            {
                "bggId": 13,
                "name": "Catan",
                "yearPublished": 1995,
                "minPlayers": 3,
                "maxPlayers": 4,
                "playingTime": 90,
                "rating": 7.1,
                "mechanics": ["Dice Rolling"],
            },
            {"bggId": 822, "name": "Carcassonne"},
        ]

    def test_blank_query_is_rejected(self) -> None:
        resolver, client = make_resolver(tool_response({"games": []}))

        with pytest.raises(InputValidationError):
            resolver.resolve_games("  ")

        client.chat.completions.create.assert_not_called()

    @pytest.mark.parametrize(
        ("status", "expected"),
        [(429, UpstreamRateLimitError), (402, UpstreamQuotaError), (500, UpstreamTransportError)],
    )
    def test_gateway_errors_are_mapped(self, status, expected) -> None:
        resolver, _ = make_resolver(error=FakeAPIError("gateway said no", status))

        with pytest.raises(expected):
            resolver.resolve_games("Catan")

    def test_missing_tool_call_is_a_format_error(self) -> None:
        message = SimpleNamespace(content="I think you mean Catan", tool_calls=None)
        resolver, _ = make_resolver(SimpleNamespace(choices=[SimpleNamespace(message=message)]))

        with pytest.raises(UpstreamFormatError):
            resolver.resolve_games("Catan")

    def test_wrong_tool_is_a_format_error(self) -> None:
        resolver, _ = make_resolver(tool_response({"games": []}, name="something_else"))

        with pytest.raises(UpstreamFormatError):
            resolver.resolve_games("Catan")

    def test_unparseable_arguments_are_a_format_error(self) -> None:
        resolver, _ = make_resolver(tool_response("{not json"))

        with pytest.raises(UpstreamFormatError):
            resolver.resolve_games("Catan")

    def test_ids_are_served_by_the_catalog(self) -> None:
        details = FakeResolver()
        details.fetch_details = MagicMock(return_value=[])
        resolver, client = make_resolver(detail_resolver=details)

        resolver.resolve_ids([13])

        details.fetch_details.assert_called_once_with([13])
        client.chat.completions.create.assert_not_called()


class TestBuildResolver:
    def test_ai_backend_without_key_fails_fast(self) -> None:
        with pytest.raises(ConfigurationError):
            build_resolver("ai", api_key=None)

    def test_unknown_backend(self) -> None:
        with pytest.raises(ConfigurationError):
            build_resolver("carrier-pigeon")

    def test_xml_backend(self) -> None:
        assert build_resolver("XML").name == "xml"
