"""Abstract base class for translation endpoint clients."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TranslationClient(ABC):
    """Interface for clients that fetch raw translation payloads."""

    @abstractmethod
    def translate(self, text: str, source_code: str, target_code: str) -> str:
        """Issue one request and return the raw response body.

        Args:
            text: Text to translate (already normalized and size-limited).
            source_code: Source language code in the endpoint's code space.
            target_code: Target language code in the endpoint's code space.

        Returns:
            The response body as text, never blank.

        Raises:
            TranslationError: NETWORK_ERROR on transport failure,
                EMPTY_RESPONSE when the body is blank.
        """
        ...

    def close(self) -> None:
        """Release any held resources. Default implementation does nothing."""

    def __enter__(self) -> TranslationClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
