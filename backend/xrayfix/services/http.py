# backend/xrayfix/services/http.py
from typing import Any, Dict, Optional
import httpx

from xrayfix.core.config import settings
from xrayfix.core.exceptions import RemoteCallError
from xrayfix.core.logging import logger


class RemoteService:
    """
    Base for outbound HTTP clients.

    Every call is bounded by ``HTTP_TIMEOUT_SECONDS`` and every failure, whether
    a transport error, a timeout or a non-2xx status, surfaces as RemoteCallError.
    """

    service_name = "remote"

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[httpx.Auth] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.auth = auth
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

    def _client(self, authenticated: bool = True) -> httpx.AsyncClient:
        # Credentials only ever go to the configured service
        return httpx.AsyncClient(
            headers=self.headers if authenticated else None,
            auth=self.auth if authenticated else None,
            timeout=self.timeout,
            transport=self._transport,
        )

    def url(self, path: str) -> str:
        if not path:
            return self.base_url
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(self, method: str, path: str, authenticated: bool = True, **kwargs: Any) -> httpx.Response:
        url = self.url(path)
        try:
            async with self._client(authenticated) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"{self.service_name} call timed out: {method} {url}")
            raise RemoteCallError(self.service_name, f"timed out after {self.timeout}s: {method} {url}") from e
        except httpx.HTTPError as e:
            logger.error(f"{self.service_name} call failed: {method} {url}: {e}")
            raise RemoteCallError(self.service_name, f"{method} {url} failed: {e}") from e

        if response.is_error:
            logger.error(
                f"{self.service_name} returned {response.status_code} for {method} {url}",
            )
            raise RemoteCallError(
                self.service_name,
                f"{method} {url} returned {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )
        return response

    async def get_json(self, path: str, **kwargs: Any) -> Any:
        response = await self.request("GET", path, **kwargs)
        return self._json(response)

    async def post_json(self, path: str, payload: Any, **kwargs: Any) -> Any:
        response = await self.request("POST", path, json=payload, **kwargs)
        return self._json(response)

    def _json(self, response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteCallError(
                self.service_name,
                f"{response.request.method} {response.request.url} returned invalid JSON",
                status_code=response.status_code,
            ) from e
