from __future__ import annotations

import asyncio
import json
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError

TRACE_HEADER = "X-Trace-ID"
TRACE_HEADER_ALIASES = (TRACE_HEADER, "X-Trace-Id", "x-trace-id")


@dataclass
class LastOperation:
    method: str
    path: str
    duration_ms: int
    result: str
    trace_id: str | None


@dataclass
class HttpClient:
    config: ClientConfig
    client: httpx.AsyncClient | None = None
    last_operation: LastOperation | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.client is None:
            self.client = httpx.AsyncClient(
                base_url=self.config.api_base_url,
                timeout=self.config.timeout_seconds,
                verify=self.config.verify_ssl,
            )

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any] | list[Any] | None:
        if self.client is None:
            raise RuntimeError("HTTP client not initialized")
        trace_id = str(uuid.uuid4())
        request_headers = {"Accept": "application/json", TRACE_HEADER: trace_id}
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        normalized_path = path if path.startswith("/") else f"/{path}"
        attempts = self.config.retries + 1 if normalized_method in {"GET", "HEAD"} else 1

        started = time.monotonic()
        response: httpx.Response | None = None
        for attempt in range(attempts):
            try:
                response = await self.client.request(
                    normalized_method,
                    normalized_path,
                    headers=request_headers,
                    json=json_body,
                    params=dict(params) if params else None,
                )
            except httpx.TransportError as exc:
                if attempt >= attempts - 1:
                    self._record(normalized_method, normalized_path, started, "error", trace_id)
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc) or "Network error",
                        details={"type": type(exc).__name__},
                        trace_id=trace_id,
                        status_code=0,
                        raw_payload=None,
                    ) from exc
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            await asyncio.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request finished without a response")

        trace_id = _trace_id_from_headers(response.headers) or trace_id
        if response.is_success:
            self._record(normalized_method, normalized_path, started, "success", trace_id)
            if not response.content:
                return None
            return response.json()

        try:
            payload = response.json()
        except json.JSONDecodeError:
            payload = {"message": response.text}
        if not isinstance(payload, dict):
            payload = {"details": payload}
        self._record(normalized_method, normalized_path, started, "error", trace_id)
        raise map_error(response.status_code, payload, trace_id)

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()

    def _record(self, method: str, path: str, started: float, result: str, trace_id: str | None) -> None:
        self.last_operation = LastOperation(
            method=method,
            path=path,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=trace_id,
        )


def _trace_id_from_headers(headers: Mapping[str, str]) -> str | None:
    for key in TRACE_HEADER_ALIASES:
        trace_id = headers.get(key)
        if trace_id:
            return trace_id
    return None
