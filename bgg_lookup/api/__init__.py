"""
HTTP surface of the lookup service.
"""

from .dispatcher import DispatchResult, RequestDispatcher
from .schemas import LookupRequest

__all__ = [
    "DispatchResult",
    "LookupRequest",
    "RequestDispatcher",
]
