"""
Thin client for the Generative Language REST API.

One attempt per call: there is no retry adapter, callers fall back instead.
"""

from __future__ import annotations

from typing import Optional

import requests

from ..core.constants import DEFAULT_TIP_TIMEOUT_SECONDS, GEMINI_ENDPOINT, GEMINI_MODEL


def create_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"Content-Type": "application/json"})
    return session


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_MODEL,
        *,
        timeout: float = DEFAULT_TIP_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("api_key is required")
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._http = session or create_session()

    def generate(self, prompt: str) -> str:
        """Return the generated text; raises requests.RequestException or ValueError."""
        url = GEMINI_ENDPOINT.format(model=self._model)
        resp = self._http.post(
            url,
            headers={"x-goog-api-key": self._api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
            timeout=self._timeout,
        )
        resp.raise_for_status()
        data = resp.json()

        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(p.get("text") or "" for p in parts).strip()
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ValueError(f"Unexpected response shape: {str(data)[:200]}") from e
        if not text:
            raise ValueError("Empty completion")
        return text
