"""Job board that recomputes the context view when its inputs change."""

from __future__ import annotations

import contextlib
import logging
from typing import Callable, Optional, Sequence

from volition_engine.context_engine import ContextResult, filter_jobs
from volition_engine.energy import EnergySettings
from volition_engine.schema import EnergyState, Job, JobCluster

logger = logging.getLogger(__name__)

BoardHandler = Callable[[ContextResult], None]


class JobBoard:
    """Keeps the filtered job view for one scope in sync with the energy settings.

    Changing jobs or clusters via ``update`` or changing the energy state triggers a
    recompute, after which subscribers receive the new ``ContextResult``.
    """

    def __init__(
        self,
        settings: EnergySettings,
        jobs: Sequence[Job] = (),
        clusters: Optional[Sequence[JobCluster]] = None,
    ) -> None:
        self._settings = settings
        self._jobs = tuple(jobs)
        self._clusters = tuple(clusters) if clusters is not None else None
        self._handlers: list[BoardHandler] = []
        self._result = self._compute()
        self._detach = settings.subscribe(self._on_energy_change)

    @property
    def result(self) -> ContextResult:
        return self._result

    @property
    def jobs(self) -> tuple[Job, ...]:
        return self._jobs

    def subscribe(self, handler: BoardHandler) -> Callable[[], None]:
        self._handlers.append(handler)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._handlers.remove(handler)

        return _unsubscribe

    def update(self, jobs: Sequence[Job], clusters: Optional[Sequence[JobCluster]] = None) -> ContextResult:
        self._jobs = tuple(jobs)
        self._clusters = tuple(clusters) if clusters is not None else None
        return self.refresh()

    def refresh(self) -> ContextResult:
        self._result = self._compute()
        logger.debug(
            "Board recomputed for %s: %d of %d jobs shown",
            self._settings.get().value,
            len(self._result.jobs),
            len(self._jobs),
        )
        for handler in list(self._handlers):
            try:
                handler(self._result)
            except Exception:  # noqa: BLE001
                logger.exception("Board handler %r failed", handler)
        return self._result

    def close(self) -> None:
        self._detach()

    def _compute(self) -> ContextResult:
        return filter_jobs(self._jobs, self._settings.get(), self._clusters)

    def _on_energy_change(self, state: EnergyState) -> None:
        self.refresh()
