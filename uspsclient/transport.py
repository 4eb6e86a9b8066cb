import asyncio
import logging
from typing import Dict, Optional

import httpx

from uspsclient.exceptions import TransportError

log = logging.getLogger(__name__)


class Transport:
    """
    Issues the single GET request behind every Web Tools call.

    A caller-supplied ``httpx.AsyncClient`` is used as-is and never closed
    here; without one, each call opens and closes its own client.
    """

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        self.http_client = http_client

    async def send(self, server_url: str, api: str, xml: str, timeout_ms: int) -> bytes:
        """
        Sends ``API=<api>&XML=<xml>`` to ``server_url`` and returns the raw response body.

        Exactly one attempt is made. ``timeout_ms`` bounds the whole exchange,
        not just individual socket operations.

        Raises:
            TransportError: On any httpx failure. ``timeout`` is True when the
                            deadline expired.
        """
        params = {"API": api, "XML": xml}
        seconds = timeout_ms / 1000
        context = {"method": api, "during": "request"}

        log.debug("Sending %s request to %s", api, server_url)
        try:
            response = await asyncio.wait_for(self._get(server_url, params, seconds), seconds)
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise TransportError(str(e) or f"{api} request timed out after {timeout_ms}ms", e,
                                 context, timeout=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(str(e) or f"{api} request failed", e, context)

        log.debug("%s responded with HTTP %s", api, response.status_code)
        return response.content

    async def _get(self, server_url: str, params: Dict[str, str], seconds: float) -> httpx.Response:
        timeout = httpx.Timeout(seconds)
        if self.http_client is not None:
            return await self.http_client.get(server_url, params=params, timeout=timeout)

        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.get(server_url, params=params)
