from __future__ import annotations

from typing import Any

import pytest

from bgg_lookup.catalog import CatalogClient
from tests.fakes import FakeSession


@pytest.fixture()
def make_client():
    def _make(*responses: Any) -> tuple[CatalogClient, FakeSession]:
        session = FakeSession(*responses)
        client = CatalogClient(base_url="https://bgg.test/xmlapi2", timeout=5, api_token=None, session=session)
        return client, session

    return _make
