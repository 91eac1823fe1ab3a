"""HTTP fetcher for OpenAI-compatible chat-completion backends.

Sends one request per call and does not retry; a failed request surfaces as a
FetchError to the caller.
"""

from __future__ import annotations

import json
from typing import Any

import aiohttp
from loguru import logger

from aitomics.config import FetcherSettings, get_settings
from aitomics.error_enums import ErrorCode
from aitomics.exceptions import FetchError


class ChatCompletionFetcher:
    """Implements the Fetcher protocol against a chat-completion endpoint.

    Uses the given ``aiohttp.ClientSession`` when there is one; otherwise a
    session is opened for each call.
    """

    def __init__(
        self,
        settings: FetcherSettings | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.session = session

    @property
    def url(self) -> str:
        return self.settings.url

    def _prepare_payload(self, content: str, context: list[dict[str, str]]) -> dict[str, Any]:
        return {
            "model": self.settings.model,
            "messages": [*context, {"role": "user", "content": content}],
            "temperature": self.settings.settings.temperature,
            "max_tokens": self.settings.settings.max_tokens,
            "stream": self.settings.settings.stream,
        }

    def _extract_content(self, response_data: Any) -> str:
        try:
            content = response_data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise FetchError(
                f"Malformed response structure from backend: {e}",
                url=self.url,
                error_code=ErrorCode.INVALID_RESPONSE,
            ) from e
        if not isinstance(content, str):
            raise FetchError(
                f"Content in backend response is not a string: {content!r}",
                url=self.url,
                error_code=ErrorCode.INVALID_RESPONSE,
            )
        return content

    async def __call__(self, content: str, context: list[dict[str, str]]) -> str:
        payload = self._prepare_payload(content, context)
        if self.session is not None:
            return await self._post(self.session, payload)
        async with aiohttp.ClientSession() as session:
            return await self._post(session, payload)

    async def _post(self, session: aiohttp.ClientSession, payload: dict[str, Any]) -> str:
        timeout_config = aiohttp.ClientTimeout(total=self.settings.request_timeout_seconds)
        try:
            async with session.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=timeout_config,
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(f"Backend error ({response.status}): {error_text[:200]}")
                    raise FetchError(
                        f"API error: {response.status} - {error_text[:200]}",
                        url=self.url,
                        status_code=response.status,
                    )
                response_data = await response.json()
        except aiohttp.ClientConnectorError as e:
            logger.error(f"Connection to {self.url} refused: {e}")
            raise FetchError(
                "Connection refused, is LM Studio running?",
                url=self.url,
                error_code=ErrorCode.CONNECTION_ERROR,
            ) from e
        except TimeoutError as e:
            raise FetchError(
                f"API call timed out after {self.settings.request_timeout_seconds}s",
                url=self.url,
                error_code=ErrorCode.CONNECTION_ERROR,
            ) from e
        except (aiohttp.ClientError, json.JSONDecodeError) as e:
            logger.error(f"Request to {self.url} failed: {type(e).__name__} - {e}")
            raise FetchError(f"API client error: {e}", url=self.url) from e

        return self._extract_content(response_data)
