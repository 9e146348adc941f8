"""Background worker thread for translation requests.

Runs the pipeline in a separate thread and hands the outcome back to the
owning thread through a queue, so session state is only ever written by
whoever drains the queue.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from queue import Empty, Queue
from threading import Thread
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass
class WorkerMessage:
    """Message from worker thread to its owner."""
    type: str  # "done", "error"
    message: str = ""
    result: Any = None


class TranslationWorker:
    """Manages a single background translation thread."""

    def __init__(self) -> None:
        self._thread: Thread | None = None
        self.queue: Queue[WorkerMessage] = Queue()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, task_fn: Callable[..., Any], **kwargs: Any) -> bool:
        """Launch a task function in a background thread.

        Returns False without starting anything if a task is still running.
        """
        if self.is_running:
            return False

        self._thread = Thread(target=self._run, args=(task_fn,), kwargs=kwargs, daemon=True)
        self._thread.start()
        return True

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the current task. Returns True if no task is left running."""
        if self._thread is not None:
            self._thread.join(timeout)
        return not self.is_running

    def drain(self) -> list[WorkerMessage]:
        """Return every message queued so far, oldest first."""
        messages: list[WorkerMessage] = []
        while True:
            try:
                messages.append(self.queue.get_nowait())
            except Empty:
                return messages

    def _run(self, task_fn: Callable[..., Any], **kwargs: Any) -> None:
        """Execute the task and put done/error message on queue."""
        try:
            result = task_fn(**kwargs)
            self.queue.put(WorkerMessage(type="done", result=result))
        except Exception as e:
            logger.exception("Translation task crashed")
            self.queue.put(WorkerMessage(type="error", message=str(e) or type(e).__name__))
