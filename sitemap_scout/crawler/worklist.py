# === FILE: sitemap_scout/crawler/worklist.py ===
"""
Draining of a dynamically growing worklist.

A :class:`Worklist` starts from one seed batch of URLs and spawns one task per
non-empty URL. Every task reports back with exactly one :class:`Batch`: the
URLs it wants processed next plus the results it produced. A single
coordinating loop owns both the in-flight counter and the result list, so no
task ever mutates shared state. The loop ends when the counter drops to zero.

Both the sitemap discovery and the page scrape stages run on top of this.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, Iterable, List, Set, TypeVar

__all__ = ("Batch", "Worklist")

T = TypeVar("T")


@dataclass(slots=True)
class Batch(Generic[T]):
    """What one unit of work hands back to the coordinator."""

    urls: List[str] = field(default_factory=list)
    results: List[T] = field(default_factory=list)


class Worklist(Generic[T]):
    """Runs *handler* for every URL reachable from the seed batch."""

    def __init__(self, handler: Callable[[str], Awaitable[Batch[T]]], name: str = "worklist") -> None:
        self.handler = handler
        self.name = name
        self.logger = logging.getLogger("SitemapScout")
        self.dispatched = 0
        self.aborted = 0

    async def drain(self, seed: Iterable[str]) -> List[T]:
        """Process *seed* and everything it leads to; return all results.

        Results arrive in completion order. If the caller cancels this
        coroutine, every unit still running is cancelled as well.
        """
        queue: asyncio.Queue[Batch[T]] = asyncio.Queue()
        results: List[T] = []
        tasks: Set[asyncio.Task[None]] = set()
        self.dispatched = 0
        self.aborted = 0

        in_flight = 1  # the seed batch
        queue.put_nowait(Batch(urls=list(seed)))
        try:
            while in_flight > 0:
                batch = await queue.get()
                in_flight -= 1
                results.extend(batch.results)
                for url in batch.urls:
                    if not url:
                        continue
                    in_flight += 1
                    self.dispatched += 1
                    task = asyncio.create_task(self._run_unit(url, queue))
                    tasks.add(task)
                    task.add_done_callback(tasks.discard)
        finally:
            pending = [t for t in tasks if not t.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        self.logger.debug("%s drained: %d units, %d results", self.name, self.dispatched, len(results))
        return results

    async def _run_unit(self, url: str, queue: asyncio.Queue[Batch[T]]) -> None:
        batch: Batch[T] = Batch()
        try:
            batch = await self.handler(url)
        except Exception:
            # only this unit is lost; the coordinator still gets its completion
            self.aborted += 1
            self.logger.exception("%s: unit for %s aborted", self.name, url)
        queue.put_nowait(batch)
