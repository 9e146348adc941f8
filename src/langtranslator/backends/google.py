"""Client for the public Google Translate web endpoint (translate_a/single)."""

from __future__ import annotations

import logging

import httpx

from langtranslator.backends.base import TranslationClient
from langtranslator.config import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from langtranslator.core.errors import ErrorKind, TranslationError

logger = logging.getLogger(__name__)

# client=gtx is the keyless web client; dt=t asks for translated segments only
CLIENT_TYPE = "gtx"
DETAIL_FLAG = "t"


class GoogleTranslateClient(TranslationClient):
    """Translation client over a single, explicitly owned httpx.Client.

    Build one at startup and pass it to whoever needs it. No retries happen
    here; a failed request is reported straight to the caller.
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(
            timeout=httpx.Timeout(timeout),
            headers={"User-Agent": user_agent},
        )

    @classmethod
    def from_settings(cls, settings) -> GoogleTranslateClient:
        """Create a client from TranslatorSettings."""
        return cls(
            settings.endpoint,
            timeout=settings.timeout,
            user_agent=settings.user_agent,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def translate(self, text: str, source_code: str, target_code: str) -> str:
        params = {
            "client": CLIENT_TYPE,
            "sl": source_code,
            "tl": target_code,
            "dt": DETAIL_FLAG,
            "q": text,
        }
        logger.debug("GET %s sl=%s tl=%s (%d chars)", self._endpoint, source_code, target_code, len(text))

        try:
            response = self._http.get(self._endpoint, params=params)
            response.raise_for_status()
            body = response.text
        except httpx.HTTPStatusError as e:
            raise TranslationError(
                ErrorKind.NETWORK_ERROR,
                f"Translation endpoint returned HTTP {e.response.status_code}",
            ) from e
        except httpx.TimeoutException as e:
            raise TranslationError(ErrorKind.NETWORK_ERROR, "Translation request timed out") from e
        except httpx.HTTPError as e:
            raise TranslationError(ErrorKind.NETWORK_ERROR, f"Network error: {e}") from e
        except (UnicodeError, httpx.InvalidURL) as e:
            raise TranslationError(ErrorKind.NETWORK_ERROR, f"Could not build request: {e}") from e

        if not body.strip():
            raise TranslationError(ErrorKind.EMPTY_RESPONSE, "Empty response from API")
        return body

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()
