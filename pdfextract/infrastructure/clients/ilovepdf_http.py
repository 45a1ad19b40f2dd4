"""HTTP client adapter for the iLovePDF split tool."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

import httpx
import jwt

from pdfextract.domain.ports.splitter_port import SplitterPort

logger = logging.getLogger(__name__)

TOKEN_ISSUER = "api.ilovepdf.com"
TOKEN_TTL_SECONDS = 2 * 60 * 60


class ILovePdfError(RuntimeError):
    """Raised when the iLovePDF API rejects a request or returns an unusable payload."""


class ILovePdfClient(SplitterPort):
    """iLovePDF REST client implementing SplitterPort using httpx (async).

    Flow for one split:
    - GET  {base}/v1/start/split          -> {"server": "...", "task": "..."}
    - POST https://{server}/v1/upload     -> {"server_filename": "..."}
    - POST https://{server}/v1/process    (ranges, merge_after=true)
    - GET  https://{server}/v1/download/{task} -> PDF bytes

    Requests are authorised with a token self-signed from the key pair, or
    obtained from POST /v1/auth when only the public key is configured.
    """

    def __init__(
        self,
        public_key: str,
        secret_key: str,
        *,
        base_url: str = "https://api.ilovepdf.com",
        timeout_seconds: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._public_key = public_key
        self._secret_key = secret_key
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout_seconds, transport=self._transport)

    def _server_url(self, server: str) -> str:
        scheme = httpx.URL(self._base_url).scheme or "https"
        return f"{scheme}://{server}"

    def _self_signed_token(self) -> str:
        now = int(time.time())
        claims = {
            "iss": TOKEN_ISSUER,
            "aud": "",
            "iat": now,
            "nbf": now,
            "exp": now + TOKEN_TTL_SECONDS,
            "jti": self._public_key,
        }
        return jwt.encode(claims, self._secret_key, algorithm="HS256")

    async def _token(self, client: httpx.AsyncClient) -> str:
        if not self._public_key:
            raise ILovePdfError("iLovePDF public key is not configured")
        if self._secret_key:
            return self._self_signed_token()
        resp = await client.post(f"{self._base_url}/v1/auth", json={"public_key": self._public_key})
        data = _json_or_raise(resp, "auth")
        token = data.get("token")
        if not isinstance(token, str) or not token:
            raise ILovePdfError("iLovePDF auth response missing token")
        return token

    async def split(self, source_path: Path, ranges: str) -> bytes:
        content = source_path.read_bytes()
        async with self._client() as client:
            headers = {"Authorization": f"Bearer {await self._token(client)}"}

            resp = await client.get(f"{self._base_url}/v1/start/split", headers=headers)
            started = _json_or_raise(resp, "start")
            server, task = started.get("server"), started.get("task")
            if not isinstance(server, str) or not server or not isinstance(task, str) or not task:
                raise ILovePdfError("iLovePDF start response missing server or task")
            server_url = self._server_url(server)

            resp = await client.post(
                f"{server_url}/v1/upload",
                headers=headers,
                data={"task": task},
                files={"file": (source_path.name, content, "application/pdf")},
            )
            uploaded = _json_or_raise(resp, "upload")
            server_filename = uploaded.get("server_filename")
            if not isinstance(server_filename, str) or not server_filename:
                raise ILovePdfError("iLovePDF upload response missing server_filename")

            payload = {
                "task": task,
                "tool": "split",
                "files": [{"server_filename": server_filename, "filename": source_path.name}],
                "split_mode": "ranges",
                "ranges": ranges,
                "merge_after": True,
            }
            resp = await client.post(f"{server_url}/v1/process", headers=headers, json=payload)
            processed = _json_or_raise(resp, "process")
            logger.debug(
                "ilovepdf_processed",
                extra={"ranges": ranges, "status": processed.get("status"), "output_filenumber": processed.get("output_filenumber")},
            )

            resp = await client.get(f"{server_url}/v1/download/{task}", headers=headers)
            if resp.is_error:
                raise ILovePdfError(f"iLovePDF download failed ({resp.status_code}): {_error_message(resp)}")
            return resp.content


def _json_or_raise(resp: httpx.Response, step: str) -> dict[str, Any]:
    if resp.is_error:
        raise ILovePdfError(f"iLovePDF {step} failed ({resp.status_code}): {_error_message(resp)}")
    try:
        data = resp.json()
    except ValueError as exc:
        raise ILovePdfError(f"iLovePDF {step} response not JSON") from exc
    if not isinstance(data, dict):
        raise ILovePdfError(f"iLovePDF {step} response not an object")
    return data


def _error_message(resp: httpx.Response) -> str:
    """Best-effort extraction of the API's error message from a failed response."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:500] or resp.reason_phrase
    if isinstance(data, dict):
        err = data.get("error")
        if isinstance(err, dict):
            message = err.get("message")
            param = err.get("param")
            if param:
                return f"{message}: {param}"
            if message:
                return str(message)
        if isinstance(data.get("message"), str):
            return data["message"]
    return resp.text[:500] or resp.reason_phrase
