#!/usr/bin/env python3
"""
hitchsync Dry Run Example

Downloads the Hitchwiki dump and runs two passes against an in-memory
store with a small write budget, showing how the second pass resumes
where the first stopped.

Usage:
    python examples/01_dry_run.py
"""

import asyncio

from hitchsync import (
    HttpClient,
    HttpSnapshotFetcher,
    MemoryDocumentStore,
    SyncOrchestrator,
    get_settings,
)


async def main() -> None:
    """Two budget-limited passes, nothing persisted."""

    settings = get_settings(store_backend="memory", max_writes=25)
    store = MemoryDocumentStore()
    fetcher = HttpSnapshotFetcher(HttpClient(timeout=settings.request_timeout))
    orchestrator = SyncOrchestrator(settings, store, fetcher=fetcher)

    try:
        for number in (1, 2):
            result = await orchestrator.run_pass()
            if not result.is_success:
                print(f"Pass {number} failed at {result.failed_stage}: {result.error}")
                return
            print(f"Pass {number}: after {result.cutoff.isoformat()}")
            print(f"  selected {result.selected:,}, wrote {result.written}")
            print(f"  newest written: {result.last_submitted}")
    finally:
        await fetcher.close()

    print(f"\n{store.count(settings.collection)} documents in memory")


if __name__ == "__main__":
    asyncio.run(main())
