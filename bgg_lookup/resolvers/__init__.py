"""
Lookup strategies for turning a query or id batch into GameRecords.

- ``xml``: BoardGameGeek XML API search followed by a batched detail call
- ``ai``: a tool-calling chat model (Together.ai)
"""

import logging
from typing import Optional

from ..config import RESOLVER_BACKEND, TOGETHER_API_KEY
from ..error_handling import ConfigurationError
from .ai_tool_call import AiToolCallResolver
from .base import GameResolver
from .xml_api import XmlApiResolver

logger = logging.getLogger(__name__)


def build_resolver(backend: str = RESOLVER_BACKEND, api_key: Optional[str] = TOGETHER_API_KEY) -> GameResolver:
    """
    Build the configured lookup strategy.

    Args:
        backend: "xml" or "ai"
        api_key: Together.ai API key, required by the ai backend

    Raises:
        ConfigurationError: For an unknown backend or a missing API key
    """
    backend = (backend or "").lower()
    if backend == "xml":
        resolver = XmlApiResolver()
    elif backend == "ai":
        resolver = AiToolCallResolver(api_key=api_key)
    else:
        raise ConfigurationError(f"Unknown resolver backend '{backend}' (expected 'xml' or 'ai')")
    logger.info(f"Using '{resolver.name}' lookup backend")
    return resolver


__all__ = [
    "GameResolver",
    "XmlApiResolver",
    "AiToolCallResolver",
    "build_resolver",
]
