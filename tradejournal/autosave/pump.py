"""Debounced autosave with flush on suspend.

The pump watches a changing payload and persists it through an injected
async sink once the payload has been quiet for ``delay`` seconds. Sink
calls are serialised: a save scheduled while another is in flight waits
for it and is written afterwards. Suspend signals (SIGTSTP, SIGHUP,
SIGTERM by default) flush any pending save immediately so a debounced
change is never dropped when the host goes away.

All methods must be called from the event loop thread.
"""

from __future__ import annotations

import asyncio
import json
import logging
import signal
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, Optional

from pydantic_core import to_jsonable_python

logger = logging.getLogger(__name__)

Sink = Callable[[Any], Awaitable[None]]

DEFAULT_DELAY = 1.2

SUSPEND_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGTSTP", "SIGHUP", "SIGTERM") if hasattr(signal, name)
)


class SaveState(str, Enum):
    """Lifecycle of the most recently scheduled payload."""

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


def serialize_payload(payload: Any) -> str:
    """Canonical JSON used to decide whether two payloads are the same."""
    return json.dumps(to_jsonable_python(payload, fallback=str), sort_keys=True)


class AutosavePump:
    """Debounced autosave controller.

    Parameters
    ----------
    sink:
        ``async def sink(payload)`` that persists a snapshot. Raising marks
        the save as failed.
    delay:
        Debounce delay in seconds.
    initial:
        Payload already persisted; scheduling an identical payload is a no-op.
    enabled:
        When ``False``, :meth:`schedule` does nothing.
    on_state_change:
        Called with the new :class:`SaveState` on every transition.
    """

    def __init__(
        self,
        sink: Sink,
        *,
        delay: float = DEFAULT_DELAY,
        initial: Any = None,
        enabled: bool = True,
        on_state_change: Optional[Callable[[SaveState], None]] = None,
    ) -> None:
        self._sink = sink
        self._delay = delay
        self._enabled = enabled
        self._on_state_change = on_state_change

        self._payload = initial
        self._last_serialized = serialize_payload(initial) if initial is not None else None
        self._generation = 0
        self._state = SaveState.IDLE

        self._timer: asyncio.TimerHandle | None = None
        self._lock = asyncio.Lock()
        self._tasks: set[asyncio.Task[bool]] = set()
        self._signals: list[int] = []

        # Counters
        self._saves: int = 0
        self._errors: int = 0

    # -- properties ---------------------------------------------------------

    @property
    def state(self) -> SaveState:
        return self._state

    @property
    def pending(self) -> bool:
        """True while a debounce timer is waiting to fire."""
        return self._timer is not None

    @property
    def payload(self) -> Any:
        """Latest scheduled payload."""
        return self._payload

    @property
    def stats(self) -> dict[str, int]:
        return {"saves": self._saves, "errors": self._errors}

    # -- public API ---------------------------------------------------------

    def schedule(self, payload: Any) -> bool:
        """Schedule ``payload`` for saving after the debounce delay.

        Returns:
            False if the pump is disabled or the payload serialises the same
            as the last scheduled one, True if a save was scheduled.
        """
        if not self._enabled:
            return False
        serialized = serialize_payload(payload)
        if serialized == self._last_serialized:
            return False

        self._last_serialized = serialized
        self._payload = payload
        self._generation += 1
        self._set_state(SaveState.SAVING)

        self._cancel_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._delay, self._fire, payload, self._generation)
        return True

    def retry(self) -> bool:
        """Schedule the latest payload again, e.g. after a failed save."""
        if self._generation == 0:
            return False
        self._last_serialized = None
        return self.schedule(self._payload)

    async def flush(self) -> None:
        """Save the pending payload now instead of waiting for the timer.

        Without a pending timer no new save is started; saves already in
        flight are awaited so the caller knows they have settled. Sink
        failures are reported through :attr:`state`, not raised.
        """
        if self._timer is None:
            if self._tasks:
                await asyncio.gather(*self._tasks)
            return
        self._cancel_timer()
        await self._save(self._payload, self._generation)

    def suspend(self) -> None:
        """Flush without awaiting, for use from signal handlers.

        The pending timer is cancelled before returning, so the debounced
        save cannot also fire later.
        """
        if self._timer is None:
            return
        self._cancel_timer()
        self._spawn(self._payload, self._generation)

    def install_signal_handlers(self, signals: Optional[Iterable[int]] = None) -> None:
        """Flush on the given signals (default: suspend and hang-up signals)."""
        loop = asyncio.get_running_loop()
        for sig in SUSPEND_SIGNALS if signals is None else signals:
            try:
                loop.add_signal_handler(sig, self.suspend)
            except (NotImplementedError, RuntimeError):
                logger.warning("Cannot install autosave flush for signal %s on this platform", sig)
                continue
            self._signals.append(sig)

    def remove_signal_handlers(self) -> None:
        loop = asyncio.get_running_loop()
        for sig in self._signals:
            loop.remove_signal_handler(sig)
        self._signals.clear()

    async def close(self) -> None:
        """Flush anything pending and detach signal handlers."""
        await self.flush()
        self.remove_signal_handlers()
        logger.debug(
            "AutosavePump closed (saves=%d, errors=%d)", self._saves, self._errors
        )

    # -- internals ----------------------------------------------------------

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, payload: Any, generation: int) -> None:
        self._timer = None
        self._spawn(payload, generation)

    def _spawn(self, payload: Any, generation: int) -> None:
        task = asyncio.get_running_loop().create_task(
            self._save(payload, generation), name="autosave",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _save(self, payload: Any, generation: int) -> bool:
        """Run the sink for one payload, one call at a time."""
        async with self._lock:
            try:
                await self._sink(payload)
            except Exception:
                logger.exception("Autosave failed")
                self._errors += 1
                self._finish(generation, SaveState.ERROR)
                return False
            self._saves += 1
            self._finish(generation, SaveState.SAVED)
            return True

    def _finish(self, generation: int, state: SaveState) -> None:
        # A newer payload is still on its way; keep reporting SAVING.
        if generation != self._generation:
            return
        self._set_state(state)

    def _set_state(self, state: SaveState) -> None:
        if state is self._state:
            return
        self._state = state
        if self._on_state_change is not None:
            self._on_state_change(state)
