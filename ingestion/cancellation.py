"""
Cooperative cancellation driven by SIGINT / SIGTERM
"""

import asyncio
import signal
from typing import Optional
from core.exceptions import IngestionCancelled
import logging

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class CancellationToken:
    """
    One cancellation source shared by reference across the pipeline.

    The runner checks it before each batch commit and, while scanning, each
    time it hands control back to the event loop. The batch in
    flight finishes committing and the checkpoint is written before the run
    stops. A second signal of either kind raises KeyboardInterrupt at once.
    """

    def __init__(self):
        self._event = asyncio.Event()
        self.reason: Optional[str] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._installed = False

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "cancelled") -> None:
        if self._event.is_set():
            return
        self.reason = reason
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self, **context) -> None:
        if self.cancelled:
            raise IngestionCancelled(
                "Ingestion interrupted",
                context={"signal": self.reason, **context}
            )

    def install_signal_handlers(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> bool:
        """
        Register SIGINT/SIGTERM on the running loop.

        Returns False where the platform does not support loop signal
        handlers (e.g. Windows); Ctrl-C then raises KeyboardInterrupt.
        """
        if self._installed:
            return True
        loop = loop or asyncio.get_running_loop()
        try:
            for sig in HANDLED_SIGNALS:
                loop.add_signal_handler(sig, self._handle_signal, sig)
        except NotImplementedError:
            logger.debug("Signal handlers not supported on this platform")
            return False
        self._loop = loop
        self._installed = True
        return True

    def remove_signal_handlers(self) -> None:
        if not self._installed or self._loop is None:
            return
        for sig in HANDLED_SIGNALS:
            self._loop.remove_signal_handler(sig)
        self._installed = False

    def _handle_signal(self, sig: signal.Signals) -> None:
        name = signal.Signals(sig).name
        if self.cancelled:
            logger.warning(f"Second interrupt received ({name}), aborting immediately")
            raise KeyboardInterrupt(name)
        logger.warning(f"Interrupt received ({name}), stopping after the current batch")
        self.cancel(name)
