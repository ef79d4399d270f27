import logging
from typing import Any

import httpx

logger = logging.getLogger("burmafoodie")


class RecipeServiceError(Exception):
    """The recipe endpoint answered with a failure or an unreadable body."""


class RecipeClient:
    """HTTP transport from the chat client to ``POST /api/v1/recipe``."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._url = url
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    async def get_recipe(
        self,
        prompt: str,
        image: str | None = None,
        language: str | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"prompt": prompt}
        if image:
            payload["imageBase64"] = image
        if language:
            payload["language"] = language

        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            resp = await client.post(self._url, json=payload)

        try:
            body = resp.json()
        except ValueError as e:
            raise RecipeServiceError(
                f"Unreadable response from server (HTTP {resp.status_code})"
            ) from e

        if resp.is_error:
            message = body.get("error") if isinstance(body, dict) else None
            logger.warning("Recipe request failed: HTTP %d %s", resp.status_code, message)
            raise RecipeServiceError(message or f"HTTP {resp.status_code}")

        if not isinstance(body, dict):
            raise RecipeServiceError("Unexpected response format")
        return body
