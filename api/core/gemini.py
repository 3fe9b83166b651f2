"""
Gemini HTTP client helpers.

Used endpoint:
- POST /v1beta/models/<model>:generateContent
    -> {"candidates": [{"content": {"parts": [{"text": "..."}]}, "finishReason": "STOP"}],
        "promptFeedback": {"blockReason": "SAFETY"}}

Errors come back as {"error": {"code": 400, "message": "...", "status": "INVALID_ARGUMENT",
"details": [{"reason": "API_KEY_INVALID", ...}]}}.
"""

from __future__ import annotations

from typing import Any

import httpx


# Gemini failures are explicit and separable from other runtime errors.
class GeminiError(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        http_status: int | None = None,
        status: str | None = None,
        reason: str | None = None,
        block_reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.status = status
        self.reason = reason
        self.block_reason = block_reason


def _error_from_response(resp: httpx.Response) -> GeminiError:
    try:
        data = resp.json()
    except ValueError:
        data = None

    error = data.get("error") if isinstance(data, dict) else None
    if not isinstance(error, dict):
        body = resp.text[:500]
        return GeminiError(f"Gemini request failed: {resp.status_code} {body}", http_status=resp.status_code)

    reason = None
    for detail in error.get("details") or []:
        if isinstance(detail, dict) and detail.get("reason"):
            reason = str(detail["reason"])
            break

    return GeminiError(
        f"Gemini request failed: {resp.status_code} {error.get('message') or ''}".strip(),
        http_status=resp.status_code,
        status=error.get("status"),
        reason=reason,
    )


def _response_text(data: dict[str, Any]) -> str:
    feedback = data.get("promptFeedback")
    if isinstance(feedback, dict) and feedback.get("blockReason"):
        block_reason = str(feedback["blockReason"])
        raise GeminiError(f"Prompt was blocked: {block_reason}", block_reason=block_reason)

    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""

    first = candidates[0] if isinstance(candidates[0], dict) else {}
    content = first.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    texts = [
        str(part["text"])
        for part in parts or []
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    ]
    text = "".join(texts).strip()

    finish_reason = str(first.get("finishReason") or "")
    if not text and finish_reason in {"SAFETY", "BLOCKLIST", "PROHIBITED_CONTENT"}:
        raise GeminiError(f"Response was blocked: {finish_reason}", block_reason=finish_reason)
    return text


class GeminiClient:
    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout_s: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = (api_key or "").strip()
        self.base_url = (base_url or "").strip().rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def generate_text(
        self,
        *,
        model: str,
        prompt: str,
        google_search: bool = False,
        temperature: float | None = None,
    ) -> str:
        """
        Generate one text response. Returns "" when the model produced nothing.
        """
        if not self.api_key:
            raise GeminiError("Gemini API key is empty.", reason="API_KEY_INVALID")
        model = (model or "").strip()
        if not model:
            raise GeminiError("Gemini model name is empty.")

        payload: dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if google_search:
            payload["tools"] = [{"google_search": {}}]
        if temperature is not None:
            payload["generationConfig"] = {"temperature": float(temperature)}

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout_s,
                transport=self._transport,
            ) as client:
                resp = await client.post(
                    f"/v1beta/models/{model}:generateContent",
                    json=payload,
                    headers={"x-goog-api-key": self.api_key},
                )
        except httpx.HTTPError as exc:
            raise GeminiError(f"Gemini request failed: {exc}") from exc

        if resp.status_code != 200:
            raise _error_from_response(resp)

        try:
            data = resp.json()
        except ValueError as exc:
            raise GeminiError(
                f"Gemini returned a non-JSON body: {resp.text[:200]}",
                http_status=resp.status_code,
            ) from exc
        if not isinstance(data, dict):
            raise GeminiError("Gemini returned an unexpected response shape.", http_status=resp.status_code)
        return _response_text(data)
