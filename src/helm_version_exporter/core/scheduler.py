"""Fixed-interval driver for the reconciliation loop."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from helm_version_exporter.core.reconciler import Reconciler
from helm_version_exporter.exceptions import DiscoveryError
from helm_version_exporter.models.status import StatusSample

logger = logging.getLogger(__name__)

DiscoverFn = Callable[[], list[dict[str, Any]]]


class CycleScheduler:
    """Calls discovery and the reconciler every ``interval`` seconds until stopped."""

    def __init__(
        self,
        discover: DiscoverFn,
        reconciler: Reconciler,
        interval: float = 60.0,
        expire_stale_series: bool = False,
    ):
        self.discover = discover
        self.reconciler = reconciler
        self.interval = interval
        self.expire_stale_series = expire_stale_series
        self._stop = threading.Event()
        self.cycles = 0

    def run_cycle(self) -> list[StatusSample] | None:
        """Run one cycle; returns None when discovery failed."""
        try:
            applications = self.discover()
        except DiscoveryError as err:
            logger.error("%s", err)
            return None
        except Exception:
            logger.exception("Unexpected failure listing applications")
            return None

        samples = self.reconciler.run_once(applications)
        self.cycles += 1

        sink = self.reconciler.sink
        if self.expire_stale_series and sink is not None:
            sink.retain_only(s.label_values() for s in samples)
        return samples

    def run_forever(self) -> None:
        while not self._stop.is_set():
            try:
                self.run_cycle()
            except Exception:
                logger.exception("Unexpected failure during reconciliation cycle")
            logger.debug("Completed cycle, sleeping for %s seconds", self.interval)
            self._stop.wait(self.interval)

    def stop(self) -> None:
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()
