# File: tests/test_worklist.py
"""Tests for the worklist drain shared by discovery and scrape."""
from __future__ import annotations

import asyncio
import random

import pytest
from sitemap_scout.crawler.worklist import Batch, Worklist


@pytest.mark.asyncio()
async def test_empty_seed_terminates():
    async def handler(url):  # pragma: no cover - never called
        raise AssertionError(url)

    worklist = Worklist(handler)
    assert await worklist.drain([]) == []
    assert worklist.dispatched == 0


@pytest.mark.asyncio()
async def test_empty_urls_are_skipped():
    calls = []

    async def handler(url):
        calls.append(url)
        return Batch(results=[url])

    assert await Worklist(handler).drain(["", "a", ""]) == ["a"]
    assert calls == ["a"]


@pytest.mark.asyncio()
async def test_growing_tree_is_drained():
    """Each node "d:<depth>:<id>" spawns three children until depth 4."""

    async def handler(url):
        _, depth, ident = url.split(":")
        depth = int(depth)
        await asyncio.sleep(random.random() / 1000)
        if depth == 4:
            return Batch(results=[url])
        children = [f"d:{depth + 1}:{ident}.{i}" for i in range(3)]
        return Batch(urls=children)

    worklist = Worklist(handler)
    leaves = await asyncio.wait_for(worklist.drain(["d:0:r"]), timeout=10)
    assert len(leaves) == 3 ** 4
    assert len(set(leaves)) == 3 ** 4
    assert worklist.dispatched == sum(3 ** d for d in range(5))


@pytest.mark.asyncio()
async def test_no_lost_results_under_concurrency():
    async def handler(url):
        await asyncio.sleep(0)
        return Batch(results=[url, url])

    urls = [f"u{i}" for i in range(500)]
    results = await Worklist(handler).drain(urls)
    assert sorted(results) == sorted(urls * 2)


@pytest.mark.asyncio()
async def test_failing_unit_is_dropped_and_run_terminates():
    async def handler(url):
        if url == "boom":
            raise RuntimeError("cannot build request")
        return Batch(results=[url])

    worklist = Worklist(handler, name="test")
    results = await worklist.drain(["a", "boom", "b"])
    assert sorted(results) == ["a", "b"]
    assert worklist.aborted == 1


@pytest.mark.asyncio()
async def test_cancellation_cancels_outstanding_units():
    started = asyncio.Event()
    cancelled = []

    async def handler(url):
        started.set()
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            cancelled.append(url)
            raise
        return Batch()  # pragma: no cover

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(Worklist(handler).drain(["a", "b"]), timeout=0.2)
    assert started.is_set()
    assert sorted(cancelled) == ["a", "b"]
