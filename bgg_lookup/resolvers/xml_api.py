"""
XML API lookup strategy using LangGraph to coordinate search and details.

The graph makes the order of operations explicit: the detail call needs
the ids produced by the search call, so the two run strictly one after
the other, and the detail call is skipped when the search finds nothing.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, TypedDict

from langgraph.graph import StateGraph, END

from ..catalog import CatalogClient, DetailResolver, SearchResolver
from ..config import DETAIL_BATCH_LIMIT
from ..models import GameRecord, SearchCandidate
from .base import GameResolver

logger = logging.getLogger(__name__)


class LookupState(TypedDict, total=False):
    query: str
    candidates: List[SearchCandidate]
    ids: List[int]
    records: List[GameRecord]


class XmlApiResolver(GameResolver):
    """Resolves games by scraping the BoardGameGeek XML API."""

    name = "xml"

    def __init__(self, client: Optional[CatalogClient] = None,
                 search_resolver: Optional[SearchResolver] = None,
                 detail_resolver: Optional[DetailResolver] = None,
                 batch_limit: int = DETAIL_BATCH_LIMIT):
        client = client or CatalogClient()
        self.search_resolver = search_resolver or SearchResolver(client)
        self.detail_resolver = detail_resolver or DetailResolver(client)
        self.batch_limit = batch_limit
        self.graph = self._build_graph()

    def _build_graph(self):
        graph = StateGraph(LookupState)

        def search(state: LookupState) -> LookupState:
            return {"candidates": self.search_resolver.search(state["query"])}

        def select_ids(state: LookupState) -> LookupState:
            candidates = state.get("candidates", [])
            ids = [c.external_id for c in candidates[: self.batch_limit]]
            logger.info(f"Selected {len(ids)} of {len(candidates)} candidates for details")
            return {"ids": ids}

        def details(state: LookupState) -> LookupState:
            return {"records": self.detail_resolver.fetch_details(state["ids"])}

        def has_ids(state: LookupState) -> str:
            return "details" if state.get("ids") else END

        graph.add_node("search", search)
        graph.add_node("select_ids", select_ids)
        graph.add_node("details", details)
        graph.set_entry_point("search")
        graph.add_edge("search", "select_ids")
        graph.add_conditional_edges("select_ids", has_ids, {"details": "details", END: END})
        graph.add_edge("details", END)
        return graph.compile()

    def resolve_games(self, query: str) -> List[GameRecord]:
        final_state: LookupState = self.graph.invoke({"query": query})
        return final_state.get("records", [])

    def resolve_ids(self, ids: Sequence[int]) -> List[GameRecord]:
        return self.detail_resolver.fetch_details(ids)
