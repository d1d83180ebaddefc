from __future__ import annotations

import base64
import json as jsonlib
from typing import Any, Dict, List, Optional
import requests

from .errors import AccessApiError, BadRequest, NotFound, ServerError


class HttpTransport:
    """
    Thin client for the Flow Access REST API exposed by the emulator
    (default http://127.0.0.1:8888, all routes under /v1).
    """

    def __init__(self, base_url: str, timeout: int = 60):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        h: Dict[str, str] = {"Accept": "application/json"}
        if extra:
            h.update(extra)
        return h

    def _normalize_path(self, path: str) -> str:
        return path if path.startswith("/") else f"/{path}"

    def _pick_exc(self, status_code: int):
        if status_code == 400:
            return BadRequest
        if status_code == 404:
            return NotFound
        if status_code >= 500:
            return ServerError
        return AccessApiError

    def _extract_error_message(self, r: requests.Response) -> str:
        try:
            ct = r.headers.get("Content-Type", "")
            if "application/json" in ct and r.content:
                payload = r.json()
                if isinstance(payload, dict):
                    return str(payload.get("message") or payload.get("error") or payload)
        except ValueError:
            pass
        return (r.text or "").strip()

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        path = self._normalize_path(path)
        url = f"{self.base_url}{path}"

        try:
            r = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json,
                headers=self._headers(headers),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise AccessApiError(message=str(e), status_code=0) from e

        if 200 <= r.status_code < 300:
            if not r.content:
                return None
            ct = r.headers.get("Content-Type", "")
            if "application/json" in ct:
                return r.json()
            return r.content

        exc = self._pick_exc(r.status_code)
        server_msg = self._extract_error_message(r)

        raise exc(
            message=f"{method} {path} failed" + (f": {server_msg}" if server_msg else ""),
            output=r.text,
            status_code=r.status_code,
        )

    # -------- Access API routes --------

    def execute_script(self, code: str, arguments: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        POST /v1/scripts against the latest sealed block.

        Arguments and the result travel as base64-encoded JSON-Cadence.
        """
        body = {
            "script": _b64(code),
            "arguments": [_b64(jsonlib.dumps(a, separators=(",", ":"))) for a in arguments],
        }
        data = self.request("POST", "/v1/scripts", params={"block_height": "sealed"}, json=body)
        if isinstance(data, bytes):
            data = data.decode("utf-8").strip().strip('"')
        return jsonlib.loads(base64.b64decode(data))

    def get_account(self, address: str) -> Dict[str, Any]:
        return self.request("GET", f"/v1/accounts/{address.removeprefix('0x')}")

    def latest_sealed_block(self) -> Any:
        return self.request("GET", "/v1/blocks", params={"height": "sealed"})


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")
