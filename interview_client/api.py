from __future__ import annotations  # HTTP client for the interview session API

import logging
from typing import Any, Dict, Optional, Union

import httpx

from config.settings import settings


logger = logging.getLogger(__name__)

BACKEND_UNREACHABLE: Dict[str, Any] = {"error": True, "message": "Cannot connect to backend"}

Payload = Union[Dict[str, Any], str]


class BackendClient:  # Thin wrapper that never raises on transport failures
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = (base_url or settings.API_BASE).rstrip("/")
        self._client = http_client or httpx.Client(
            timeout=timeout if timeout is not None else settings.CLIENT_TIMEOUT_S,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "BackendClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, *, json: Optional[Dict[str, Any]] = None) -> Payload:  # Send request and decode body
        url = f"{self.base_url}{path}"
        try:
            response = self._client.request(method, url, json=json)
        except httpx.HTTPError as exc:
            logger.error("Network error calling %s %s: %s", method, url, exc)
            return dict(BACKEND_UNREACHABLE)

        if response.is_error:
            logger.error("API error %s %s: %s", method, url, response.status_code)

        content_type = response.headers.get("content-type", "")
        if "text/plain" in content_type:
            return {"detail": response.text} if response.is_error else response.text
        try:
            return response.json()
        except ValueError:
            logger.warning("Response from %s is not JSON, using text", url)
            return {"detail": response.text} if response.is_error else response.text

    def create_session(self, role: str, level: str, persona: str) -> Payload:
        return self._request("POST", "/session", json={"role": role, "level": level, "persona": persona})

    def get_next_question(self, session_id: str) -> Payload:
        return self._request("GET", f"/session/{session_id}/next")

    def submit_answer(self, session_id: str, text: str) -> Payload:
        return self._request("POST", f"/session/{session_id}/answer", json={"text": text})

    def end_session(self, session_id: str) -> Payload:
        return self._request("POST", f"/session/{session_id}/end")

    def get_feedback(self, session_id: str) -> Payload:
        return self._request("GET", f"/session/{session_id}/feedback")


def is_unreachable(payload: Any) -> bool:
    """True only when the request never reached the backend."""

    return payload == BACKEND_UNREACHABLE


def is_failure(payload: Any) -> bool:
    """True for the unreachable marker or any JSON error body."""

    if payload is None:
        return True
    if isinstance(payload, dict):
        return bool(payload.get("error")) or "detail" in payload
    return False


__all__ = ["BACKEND_UNREACHABLE", "BackendClient", "Payload", "is_failure", "is_unreachable"]
