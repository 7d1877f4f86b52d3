"""
Segmentation host that keeps phase results in sync with changing events.

The host owns the loading flag and the last computed result. Callers trigger
a recomputation with ``update()`` whenever they hold a new event collection;
subscribers are told about the loading state immediately and about the new
result once it has been computed.
"""

import asyncio
import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence

from phaseparser.catalog.bosses import PhaseDescriptor
from phaseparser.parser.events import BoundaryEvent
from .phases import SegmentationResult, segment

logger = logging.getLogger(__name__)

PhaseCallback = Callable[[bool, Optional[SegmentationResult]], Any]


class SegmentationHost:
    """
    Re-runs phase segmentation whenever its input events change.

    Features:
    - Identity based change detection (no deep comparison)
    - Loading flag set synchronously on change
    - Last-write-wins: results of superseded runs are discarded
    - A failed run clears the loading flag and is kept in ``error``
    """

    def __init__(
        self,
        catalog_phases: Mapping[str, PhaseDescriptor],
        events: Optional[Sequence[BoundaryEvent]] = None,
    ):
        """
        Initialize the host.

        Args:
            catalog_phases: Known phases for the boss being analyzed
            events: Initial phase boundary events, if already available
        """
        self.catalog_phases = catalog_phases
        self._events = events
        self._result: Optional[SegmentationResult] = None
        self._loading = True
        self.error: Optional[Exception] = None

        self._subscribers: List[PhaseCallback] = []
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def events(self) -> Optional[Sequence[BoundaryEvent]]:
        return self._events

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def result(self) -> Optional[SegmentationResult]:
        """Last computed result, or None while loading."""
        return None if self._loading else self._result

    def subscribe(self, callback: PhaseCallback) -> Callable[[], None]:
        """
        Register a callback for state changes.

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def render(self, continuation: PhaseCallback) -> Any:
        """Hand the current state to a rendering continuation."""
        return continuation(self._loading, self.result)

    async def start(self) -> Optional[SegmentationResult]:
        """Compute phases for the initial events."""
        self._schedule()
        return await self.wait()

    def update(self, events: Optional[Sequence[BoundaryEvent]]) -> bool:
        """
        Trigger a recomputation if the event collection changed.

        Must be called from a running event loop.

        Args:
            events: The current event collection

        Returns:
            True if a recomputation was scheduled
        """
        if events is self._events and self._generation:
            return False

        self._events = events
        self._loading = True
        self._result = None
        self.error = None
        self._notify()
        self._schedule()
        return True

    async def wait(self) -> Optional[SegmentationResult]:
        """
        Wait for the most recently scheduled run to finish.

        Raises:
            Exception: Whatever the most recent run raised
        """
        while self._task is not None:
            task = self._task
            try:
                await task
            except asyncio.CancelledError:
                if task is self._task:
                    raise
                continue
            if task is self._task:
                break
        return self.result

    def _schedule(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

        self._generation += 1
        self._task = asyncio.get_running_loop().create_task(
            self._parse(self._generation, self._events)
        )

    async def _parse(self, generation: int, events: Optional[Sequence[BoundaryEvent]]) -> None:
        try:
            phases = segment(events, self.catalog_phases)
        except Exception as e:
            if generation != self._generation:
                logger.debug(f"Ignoring failure of stale run {generation}: {e}")
                return
            logger.exception(f"Phase segmentation failed for {len(events or [])} boundary events")
            self.error = e
            self._result = None
            self._loading = False
            self._notify()
            raise

        if generation != self._generation:
            logger.debug(f"Discarding stale phase result (run {generation}, current {self._generation})")
            return

        logger.info(f"Segmented {len(events or [])} boundary events into {len(phases)} phases")
        self._result = phases
        self._loading = False
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self._loading, self.result)
