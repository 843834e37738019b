"""
Request Dispatcher: the single entry point for a lookup request.

Each call is independent: the dispatcher keeps no per-request state and
every failure above field level comes back as an error envelope rather
than an exception.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from ..config import INVALID_IDS_MESSAGE, INVALID_JSON_MESSAGE, MISSING_INPUT_MESSAGE
from ..error_handling import InputValidationError, error_envelope
from ..resolvers import GameResolver
from .schemas import LookupRequest

logger = logging.getLogger(__name__)


@dataclass
class DispatchResult:
    """Status code and JSON body (None for an empty body)."""
    status_code: int
    body: Optional[Dict[str, Any]] = None


def _parse_request(raw_body: Union[bytes, str, None]) -> LookupRequest:
    if not raw_body:
        raise InputValidationError(MISSING_INPUT_MESSAGE)
    try:
        body = json.loads(raw_body)
    except ValueError as e:
        raise InputValidationError(INVALID_JSON_MESSAGE) from e
    if not isinstance(body, dict):
        raise InputValidationError(MISSING_INPUT_MESSAGE)
    try:
        return LookupRequest.model_validate(body)
    except ValidationError as e:
        # query is never rejected, so only the id batch can fail here
        raise InputValidationError(INVALID_IDS_MESSAGE) from e


class RequestDispatcher:
    """Routes a request to search mode or id-batch mode and shapes the envelope."""

    def __init__(self, resolver: GameResolver):
        self.resolver = resolver

    def handle(self, method: str, raw_body: Union[bytes, str, None] = None) -> DispatchResult:
        """
        Handle one request.

        Args:
            method: HTTP method
            raw_body: Raw JSON request body

        Returns:
            DispatchResult with status 200 and ``{success: true, data: [...]}``,
            or an error status with ``{success: false, error: "..."}``
        """
        if method.upper() == "OPTIONS":
            return DispatchResult(200)

        try:
            request = _parse_request(raw_body)

            if request.is_search:
                logger.info(f"Search mode: '{request.query}'")
                records = self.resolver.resolve_games(request.query)
            elif request.bgg_ids is not None:
                logger.info(f"Id batch mode: {len(request.bgg_ids)} id(s)")
                records = self.resolver.resolve_ids(request.bgg_ids)
            else:
                raise InputValidationError(MISSING_INPUT_MESSAGE)
        except Exception as e:
            status, envelope = error_envelope(e)
            logger.warning(f"Lookup failed with {status}: {e}")
            return DispatchResult(status, envelope)

        logger.info(f"Returning {len(records)} game(s)")
        return DispatchResult(200, {"success": True, "data": [record.to_dict() for record in records]})
