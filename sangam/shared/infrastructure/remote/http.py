"""HTTP adapter for the hosted document service.

Wire protocol (JSON over HTTPS):

    POST  /v1/identity/anonymous          -> {"uid": ..., "session_token": ...}
    POST  /v1/identity/token  {"token"}   -> {"uid": ..., "session_token": ...}
    GET   /v1/documents/{path}            -> document | 404
    PUT   /v1/documents/{path}            replace
    PATCH /v1/documents/{path}            field merge
    POST  /v1/collections/{name}          -> {"id": ...}

``SERVER_TIMESTAMP`` values are sent as ``{"$serverTimestamp": true}``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from sangam.shared.infrastructure.remote.base import (
    SERVER_TIMESTAMP,
    Document,
    DocumentStore,
    DocumentStoreError,
    IdentityError,
    IdentityProvider,
    RemoteBackend,
    RemoteUnavailableError,
)

logger = logging.getLogger(__name__)

SERVER_TIMESTAMP_WIRE = {"$serverTimestamp": True}


class _Session:
    """Credentials shared by the identity and document adapters."""

    def __init__(self, api_key: Optional[str]) -> None:
        self.api_key = api_key
        self.session_token: Optional[str] = None

    def headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["X-Api-Key"] = self.api_key
        if self.session_token:
            headers["Authorization"] = f"Bearer {self.session_token}"
        return headers


def _encode(data: Document) -> Dict[str, Any]:
    return {key: (SERVER_TIMESTAMP_WIRE if value is SERVER_TIMESTAMP else value) for key, value in data.items()}


class HttpIdentityProvider(IdentityProvider):
    def __init__(self, client: httpx.AsyncClient, session: _Session) -> None:
        super().__init__()
        self._client = client
        self._session = session

    async def _redeem_token(self, token: str) -> str:
        return await self._sign_in("/v1/identity/token", {"token": token})

    async def _create_anonymous(self) -> str:
        return await self._sign_in("/v1/identity/anonymous", {})

    async def _sign_in(self, endpoint: str, body: Dict[str, Any]) -> str:
        try:
            response = await self._client.post(endpoint, json=body, headers=self._session.headers())
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise IdentityError(f"Sign-in via {endpoint} failed: {e}") from e

        uid = data.get("uid") if isinstance(data, dict) else None
        if not uid:
            raise IdentityError(f"Sign-in via {endpoint} returned no user id")
        self._session.session_token = data.get("session_token")
        return str(uid)


class HttpDocumentStore(DocumentStore):
    def __init__(self, client: httpx.AsyncClient, session: _Session) -> None:
        self._client = client
        self._session = session

    async def get(self, path: str) -> Optional[Document]:
        try:
            response = await self._client.get(f"/v1/documents/{path}", headers=self._session.headers())
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()
        except httpx.TransportError as e:
            raise RemoteUnavailableError(f"Reading {path} failed: {e}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise DocumentStoreError(f"Reading {path} failed: {e}") from e

        if not isinstance(data, dict):
            raise DocumentStoreError(f"Reading {path} returned a non-object document")
        return data

    async def set(self, path: str, data: Document, merge: bool = False) -> None:
        method = "PATCH" if merge else "PUT"
        try:
            response = await self._client.request(
                method,
                f"/v1/documents/{path}",
                json=_encode(data),
                headers=self._session.headers(),
            )
            response.raise_for_status()
        except httpx.TransportError as e:
            raise RemoteUnavailableError(f"{method} {path} failed: {e}") from e
        except httpx.HTTPError as e:
            raise DocumentStoreError(f"{method} {path} failed: {e}") from e

    async def add(self, collection: str, data: Document) -> str:
        try:
            response = await self._client.post(
                f"/v1/collections/{collection}",
                json=_encode(data),
                headers=self._session.headers(),
            )
            response.raise_for_status()
            body = response.json()
        except httpx.TransportError as e:
            raise RemoteUnavailableError(f"Appending to {collection} failed: {e}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise DocumentStoreError(f"Appending to {collection} failed: {e}") from e

        document_id = body.get("id") if isinstance(body, dict) else None
        if not document_id:
            raise DocumentStoreError(f"Appending to {collection} returned no document id")
        return str(document_id)


class HttpBackend(RemoteBackend):
    """Remote backend over an ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        session = _Session(api_key)
        super().__init__(
            identity=HttpIdentityProvider(self._client, session),
            documents=HttpDocumentStore(self._client, session),
            name="http",
        )
        logger.info(f"HTTP remote backend configured for {base_url}")

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
