from __future__ import annotations

"""
HTTP JSON-RPC client (sync, httpx).

- One request per call; the caller waits for the single response.
- Retries only calls marked idempotent (read-only views) on transient
  transport failures and 429/5xx. State-changing calls move funds and are
  sent exactly once.

Example:
    from treasureboard.rpc.http import RpcClient
    with RpcClient("https://rpc.testnet.near.org") as rpc:
        boards = rpc.request("games", {"contract_id": "..."}, idempotent=True)
"""

import json
import logging
import random
import time
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Union

import httpx

from ..errors import RemoteCallFailed
from ..version import __version__ as PKG_VERSION

log = logging.getLogger(__name__)

JSON = Union[dict, list, str, int, float, bool, None]
Params = Union[Sequence[Any], Mapping[str, Any], None]

# Codes used for failures that never reached the contract.
TRANSPORT_ERROR = -32098
INTERNAL_ERROR = -32603


class _Retriable(Exception):
    """Transient failure worth another attempt for idempotent calls."""


def _is_retriable_http(status: int) -> bool:
    # Typical transient HTTP statuses: 429/502/503/504
    return status in (429, 502, 503, 504)


def _jitter_backoff(base: float, factor: float, attempt: int, jitter: float) -> float:
    # Exponential backoff with jitter in [0, jitter]
    return base * (factor ** max(attempt - 1, 0)) + random.random() * jitter


@dataclass
class RpcClient:
    """Synchronous JSON-RPC 2.0 client over HTTP."""

    url: str
    timeout: float = 10.0
    max_retries: int = 3
    backoff_base: float = 0.25
    backoff_factor: float = 1.8
    backoff_jitter: float = 0.2
    headers: Optional[Mapping[str, str]] = None
    transport: Optional[httpx.BaseTransport] = None
    _id_counter: Iterator[int] = field(default_factory=lambda: count(start=1))
    _client: Any = field(init=False, default=None)

    def __post_init__(self) -> None:
        merged_headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"treasureboard-py/{PKG_VERSION}",
        }
        if self.headers:
            merged_headers.update(dict(self.headers))
        self._client = httpx.Client(
            timeout=self.timeout,
            headers=merged_headers,
            transport=self.transport,
        )

    # --- context manager -------------------------------------------------

    def __enter__(self) -> "RpcClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    # --- public API ------------------------------------------------------

    def request(self, method: str, params: Params = None, *, idempotent: bool = False) -> JSON:
        """
        Perform a single JSON-RPC request and return `result`.

        Raises RemoteCallFailed on transport errors, non-JSON replies and
        JSON-RPC error objects (the remote message is kept verbatim).
        """
        payload = self._make_payload(method, params)
        attempts = (self.max_retries + 1) if idempotent else 1
        last: Optional[Exception] = None
        for attempt in range(1, attempts + 1):
            try:
                return self._send_once(method, payload)
            except _Retriable as e:
                last = e
                if attempt >= attempts:
                    break
                delay = _jitter_backoff(self.backoff_base, self.backoff_factor, attempt, self.backoff_jitter)
                log.debug("rpc %s attempt %d failed (%s); retrying in %.2fs", method, attempt, e, delay)
                time.sleep(delay)
        raise RemoteCallFailed(method, "RPC transport failed", code=TRANSPORT_ERROR, data=str(last))

    # --- internals -------------------------------------------------------

    def _make_payload(self, method: str, params: Params) -> Dict[str, Any]:
        if params is None:
            params = []
        elif isinstance(params, Mapping):
            params = dict(params)
        elif isinstance(params, Sequence) and not isinstance(params, (str, bytes, bytearray)):
            params = list(params)
        else:
            params = [params]  # type: ignore[list-item]
        return {"jsonrpc": "2.0", "id": next(self._id_counter), "method": method, "params": params}

    def _send_once(self, method: str, payload: Dict[str, Any]) -> JSON:
        if self._client is None:
            raise RuntimeError("RpcClient is closed")
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        log.debug("rpc -> %s id=%s", method, payload["id"])
        try:
            r = self._client.post(self.url, content=body)
        except (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError) as e:
            raise _Retriable(f"{type(e).__name__}: {e}") from e
        except httpx.TransportError as e:
            # Proxy, unsupported scheme and the like: another attempt won't help.
            raise RemoteCallFailed(
                method, "RPC transport failed", code=TRANSPORT_ERROR, data=f"{type(e).__name__}: {e}"
            ) from e
        if _is_retriable_http(r.status_code):
            raise _Retriable(f"HTTP {r.status_code}")
        try:
            resp = r.json()
        except ValueError as e:
            raise RemoteCallFailed(
                method,
                "Non-JSON response from RPC",
                code=INTERNAL_ERROR,
                data=f"HTTP {r.status_code}: {r.text[:256]}",
            ) from e

        if not isinstance(resp, dict):
            raise RemoteCallFailed(method, "Invalid JSON-RPC response type", code=INTERNAL_ERROR, data=type(resp).__name__)
        if resp.get("error") is not None:
            err = resp["error"] if isinstance(resp["error"], dict) else {"message": str(resp["error"])}
            raise RemoteCallFailed(
                method,
                str(err.get("message", "Unknown error")),
                code=err.get("code"),
                data=err.get("data"),
            )
        if "result" not in resp:
            raise RemoteCallFailed(method, "Malformed JSON-RPC response", code=INTERNAL_ERROR, data=resp)
        return resp["result"]


__all__ = ["RpcClient", "TRANSPORT_ERROR", "INTERNAL_ERROR"]
