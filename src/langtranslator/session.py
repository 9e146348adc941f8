"""Translator session: the observable state behind one UI lifetime.

The UI collaborator reads ``TranslatorSession.state`` (or subscribes to
changes) and calls the mutation methods. ``translate()`` returns at once;
the request runs on a background worker and its outcome is applied the
next time the owning thread calls ``poll()``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from langtranslator.core.errors import ErrorKind
from langtranslator.core.languages import ENGLISH, SPANISH, Language, find_language
from langtranslator.pipeline import FAILURE_PREFIX, TranslationResult, Translator
from langtranslator.worker import TranslationWorker, WorkerMessage

logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "Please enter text"

StateListener = Callable[["SessionState"], None]


class SessionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    """Read-only snapshot of a session."""
    input_text: str = ""
    translated_text: str = ""
    source_language: Language = ENGLISH
    target_language: Language = SPANISH
    is_loading: bool = False
    error: str | None = None
    error_kind: ErrorKind | None = None
    dropped_chunks: int = 0

    @property
    def status(self) -> SessionStatus:
        if self.is_loading:
            return SessionStatus.LOADING
        if self.error is not None:
            return SessionStatus.FAILED
        if self.translated_text:
            return SessionStatus.SUCCESS
        return SessionStatus.IDLE


def _as_language(language: Language | str) -> Language:
    if isinstance(language, Language):
        return language
    return find_language(language)


class TranslatorSession:
    """Single-writer state machine driving translations for one user session."""

    def __init__(
        self,
        translator: Translator,
        *,
        source_language: Language | str = ENGLISH,
        target_language: Language | str = SPANISH,
        worker: TranslationWorker | None = None,
    ) -> None:
        self._translator = translator
        self._worker = worker or TranslationWorker()
        self._listeners: list[StateListener] = []
        self._state = SessionState(
            source_language=_as_language(source_language),
            target_language=_as_language(target_language),
        )

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call listener with every new state. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes: object) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    # ── Mutations ──

    def set_input_text(self, text: str) -> None:
        self._update(input_text=text)

    def set_source_language(self, language: Language | str) -> None:
        self._update(source_language=_as_language(language))

    def set_target_language(self, language: Language | str) -> None:
        self._update(target_language=_as_language(language))

    def set_error_message(self, message: str | None) -> None:
        """Show an error raised outside the core (e.g. a failed connectivity check)."""
        self._update(error=message, error_kind=None)

    def swap_languages(self) -> bool:
        """Exchange source and target, carrying the last translation over as input.

        Re-translates right away when the new input is not blank. Rejected
        while a translation is in flight; returns False in that case.
        """
        state = self._state
        if state.is_loading:
            logger.info("Ignoring language swap while a translation is in flight")
            return False

        next_input = state.translated_text if state.translated_text.strip() else state.input_text
        self._update(
            source_language=state.target_language,
            target_language=state.source_language,
            input_text=next_input,
            translated_text="",
            error=None,
            error_kind=None,
            dropped_chunks=0,
        )
        if next_input.strip():
            self.translate()
        return True

    def translate(self) -> bool:
        """Start translating the current input in the background.

        Returns True if a request was started. Blank input sets the
        "Please enter text" error without entering the loading state; a
        call made while another translation is in flight is rejected.
        """
        state = self._state
        text = state.input_text.strip()
        if not text:
            self._update(
                translated_text="",
                error=EMPTY_INPUT_MESSAGE,
                error_kind=ErrorKind.EMPTY_INPUT,
                dropped_chunks=0,
            )
            return False

        if state.is_loading:
            logger.info("Ignoring translate request while another is in flight")
            return False

        started = self._worker.start(
            self._translator.translate,
            text=text,
            source_lang=state.source_language.code,
            target_lang=state.target_language.code,
        )
        if not started:
            logger.info("Ignoring translate request while the worker is still busy")
            return False
        self._update(is_loading=True)
        return True

    # ── Applying results ──

    def poll(self) -> bool:
        """Apply any finished translation. Returns True if the state changed."""
        messages = self._worker.drain()
        if not messages:
            return False
        # The worker posts its result as its last step; let the thread exit
        # before listeners get a chance to start the next request
        self._worker.join()
        for message in messages:
            self._apply(message)
        return True

    def wait(self, timeout: float | None = None) -> SessionState:
        """Block until the in-flight translation finishes, then poll."""
        self._worker.join(timeout)
        self.poll()
        return self._state

    def _apply(self, message: WorkerMessage) -> None:
        if message.type == "done":
            result: TranslationResult = message.result
            if result.ok:
                self._update(
                    is_loading=False,
                    translated_text=result.translated_text,
                    error=None,
                    error_kind=None,
                    dropped_chunks=len(result.dropped_chunks),
                )
            else:
                assert result.error is not None
                self._update(
                    is_loading=False,
                    translated_text="",
                    error=result.error.message,
                    error_kind=result.error.kind,
                    dropped_chunks=0,
                )
        else:
            self._update(
                is_loading=False,
                translated_text="",
                error=f"{FAILURE_PREFIX}{message.message}",
                error_kind=None,
                dropped_chunks=0,
            )
