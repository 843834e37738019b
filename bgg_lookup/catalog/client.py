"""
Outbound HTTP access to the BoardGameGeek XML API.
"""

import logging
from typing import Any, Dict, Optional

import requests

from ..config import BGG_API_BASE, BGG_API_TOKEN, REQUEST_TIMEOUT, USER_AGENT
from ..error_handling import UpstreamTransportError

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 500


class CatalogClient:
    """
    Thin GET wrapper around the XML API.

    No retries are attempted: a failed call fails the whole lookup. Without
    an injected session every call goes through ``requests.get`` and so
    shares no connection state with other requests.
    """

    def __init__(self, base_url: str = BGG_API_BASE, timeout: float = REQUEST_TIMEOUT,
                 api_token: Optional[str] = BGG_API_TOKEN, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session if session is not None else requests
        self.headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/xml",
        }
        if api_token:
            self.headers["Authorization"] = f"Bearer {api_token}"

    def get_xml(self, endpoint: str, params: Dict[str, Any]) -> str:
        """
        Fetch an XML document from the API.

        Args:
            endpoint: Endpoint name, e.g. "search" or "thing"
            params: Query parameters (URL-encoded by requests)

        Returns:
            Response body as text

        Raises:
            UpstreamTransportError: On network failure, timeout or non-2xx status
        """
        url = f"{self.base_url}/{endpoint}"
        try:
            response = self.http.get(url, params=params, headers=self.headers, timeout=self.timeout)
        except requests.Timeout as e:
            logger.error(f"Timed out after {self.timeout}s calling {url}: {e}")
            raise UpstreamTransportError(f"Timeout calling {endpoint}") from e
        except requests.RequestException as e:
            logger.error(f"Network error calling {url}: {e}")
            raise UpstreamTransportError(f"Network error calling {endpoint}: {e}") from e

        if not 200 <= response.status_code < 300:
            snippet = (response.text or "")[:SNIPPET_LENGTH]
            logger.error(f"BGG {endpoint} returned HTTP {response.status_code}: {snippet}")
            raise UpstreamTransportError(
                f"BGG {endpoint} returned HTTP {response.status_code}",
                upstream_status=response.status_code,
                snippet=snippet,
            )
        return response.text
