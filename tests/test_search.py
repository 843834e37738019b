from __future__ import annotations

import pytest
import requests

from bgg_lookup.catalog import SearchResolver
from bgg_lookup.catalog.search import parse_search_response
from bgg_lookup.error_handling import InputValidationError, UpstreamFormatError, UpstreamTransportError
from bgg_lookup.models import SearchCandidate
from tests.fakes import FakeResponse
from tests.samples import SEARCH_XML


class TestParseSearchResponse:
    def test_keeps_order_and_skips_items_without_primary_name(self) -> None:
        assert parse_search_response(SEARCH_XML) == [
            SearchCandidate(external_id=13, primary_name="Catan", year_published=1995),
            SearchCandidate(external_id=278, primary_name="Catan: Cities & Knights", year_published=1998),
        ]

    def test_caps_results(self) -> None:
        items = "".join(
            f'<item type="boardgame" id="{i}"><name type="primary" value="Game {i}"/></item>'
            for i in range(1, 31)
        )
        candidates = parse_search_response(f"<items>{items}</items>")
        assert len(candidates) == 20
        assert candidates[0].external_id == 1
        assert candidates[-1].external_id == 20

    def test_year_is_optional(self) -> None:
        xml = '<items><item type="boardgame" id="7"><name type="primary" value="X"/></item></items>'
        assert parse_search_response(xml) == [SearchCandidate(external_id=7, primary_name="X")]

    def test_non_numeric_id_is_skipped(self) -> None:
        xml = '<items><item type="boardgame" id="abc"><name type="primary" value="X"/></item></items>'
        assert parse_search_response(xml) == []

    def test_empty_result_is_not_an_error(self) -> None:
        assert parse_search_response('<items total="0" termsofuse="x"></items>') == []
        assert parse_search_response("") == []

    def test_malformed_document_is_a_format_error(self) -> None:
        with pytest.raises(UpstreamFormatError):
            parse_search_response("<items><item type=\"boardgame\" id=\"13\">")


class TestSearchResolver:
    def test_sends_encoded_query_and_headers(self, make_client) -> None:
        client, session = make_client(SEARCH_XML)

        candidates = SearchResolver(client).search("  Catan  ")

        assert [c.external_id for c in candidates] == [13, 278]
        call = session.calls[0]
        assert call["url"] == "https://bgg.test/xmlapi2/search"
        assert call["params"] == {"query": "Catan", "type": "boardgame"}
        assert call["headers"]["Accept"] == "application/xml"
        assert "BoardGameCollectionLookup" in call["headers"]["User-Agent"]
        assert call["timeout"] == 5

    @pytest.mark.parametrize("query", ["", "   ", "\t\n", None])
    def test_blank_query_is_rejected_without_a_request(self, make_client, query) -> None:
        client, session = make_client()

        with pytest.raises(InputValidationError):
            SearchResolver(client).search(query)

        assert session.calls == []

    def test_non_2xx_is_a_transport_failure(self, make_client) -> None:
        client, _ = make_client(FakeResponse("<error>busy</error>", status_code=503))

        with pytest.raises(UpstreamTransportError) as exc_info:
            SearchResolver(client).search("Catan")

        assert exc_info.value.upstream_status == 503
        assert "busy" in exc_info.value.snippet

    def test_timeout_is_a_transport_failure(self, make_client) -> None:
        client, _ = make_client(requests.Timeout("read timed out"))

        with pytest.raises(UpstreamTransportError):
            SearchResolver(client).search("Catan")
