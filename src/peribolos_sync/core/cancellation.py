"""Cooperative cancellation for the sync run."""

import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType

import structlog

from peribolos_sync.core.exceptions import OperationCancelled

logger = structlog.get_logger(__name__)


class CancellationToken:
    """A flag checked at each blocking step of the run.

    Signal handlers only set the flag; the pipeline raises
    ``OperationCancelled`` the next time it checks.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def cancel(self, reason: str = "cancelled") -> None:
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def raise_if_cancelled(self, step: str) -> None:
        """Raise ``OperationCancelled`` if the token has been set."""
        if self._event.is_set():
            raise OperationCancelled(
                f"Run cancelled before {step}",
                details={"step": step, "reason": self._reason},
            )

    @contextmanager
    def handle_signals(
        self, signals: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)
    ) -> Iterator[None]:
        """Cancel this token when any of ``signals`` arrives inside the block.

        The previous handlers are restored on exit.
        """

        def _handler(signum: int, frame: FrameType | None) -> None:
            name = signal.Signals(signum).name
            logger.warning("Received signal, stopping after current step", signal=name)
            self.cancel(reason=name)

        previous = {sig: signal.signal(sig, _handler) for sig in signals}
        try:
            yield
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler if handler is not None else signal.SIG_DFL)


def check_cancelled(token: CancellationToken | None, step: str) -> None:
    """Helper for code paths where the token is optional."""
    if token is not None:
        token.raise_if_cancelled(step)
