"""
Async client for the headless content store (Sanity HTTP API).

Configuration (settings / env):
    SANITY_PROJECT_ID, SANITY_DATASET, SANITY_API_VERSION,
    SANITY_USE_CDN, SANITY_WRITE_TOKEN, SANITY_TIMEOUT
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx
from django.conf import settings


logger = logging.getLogger(__name__)


class ContentStoreError(Exception):
    """The content store could not answer a query (transport, HTTP or payload error)."""


class ContentClient:
    """Thin async wrapper around the content store query and mutate endpoints."""

    def __init__(
        self,
        project_id: str,
        dataset: str,
        *,
        api_version: str = "2024-10-01",
        use_cdn: bool = False,
        token: str = "",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not project_id:
            raise ContentStoreError("SANITY_PROJECT_ID is not configured")
        self.project_id = project_id
        self.dataset = dataset
        self.api_version = api_version.lstrip("v")
        self.use_cdn = use_cdn
        self._token = token
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, **overrides) -> "ContentClient":
        options = {
            "api_version": settings.SANITY_API_VERSION,
            "use_cdn": settings.SANITY_USE_CDN,
            "token": settings.SANITY_WRITE_TOKEN,
            "timeout": settings.SANITY_TIMEOUT,
        }
        options.update(overrides)
        return cls(settings.SANITY_PROJECT_ID, settings.SANITY_DATASET, **options)

    def _base_url(self, *, cdn: bool) -> str:
        host = "apicdn.sanity.io" if cdn else "api.sanity.io"
        return f"https://{self.project_id}.{host}/v{self.api_version}"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def aclose(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "ContentClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch(self, query: str, params: dict[str, Any] | None = None, *, cdn: bool | None = None) -> Any:
        """
        Run a GROQ query and return its `result` (a document, a list or None).
        """
        use_cdn = self.use_cdn if cdn is None else cdn
        url = f"{self._base_url(cdn=use_cdn)}/data/query/{self.dataset}"
        query_params = {"query": query.strip()}
        for name, value in (params or {}).items():
            query_params[f"${name}"] = json.dumps(value)

        payload = await self._request("GET", url, params=query_params)
        if "result" not in payload:
            raise ContentStoreError("Content store response has no 'result'")
        return payload["result"]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def increment_views(self, document_id: str, by: int = 1) -> dict:
        if not self._token:
            raise ContentStoreError("SANITY_WRITE_TOKEN is required for mutations")
        url = f"{self._base_url(cdn=False)}/data/mutate/{self.dataset}"
        body = {"mutations": [{"patch": {"id": document_id, "inc": {"views": by}}}]}
        return await self._request(
            "POST",
            url,
            json=body,
            headers={"Authorization": f"Bearer {self._token}"},
        )

    async def _request(self, method: str, url: str, **kwargs) -> dict:
        client = self._get_client()
        try:
            resp = await client.request(method, url, **kwargs)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error("Content store error %d: %s", e.response.status_code, e.response.text[:500])
            raise ContentStoreError(f"Content store returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Content store request failed: %s", e)
            raise ContentStoreError(f"Content store request failed: {e}") from e
        except ValueError as e:
            logger.error("Content store sent invalid JSON: %s", e)
            raise ContentStoreError("Content store sent invalid JSON") from e
        if not isinstance(payload, dict):
            raise ContentStoreError("Unexpected content store payload")
        return payload
