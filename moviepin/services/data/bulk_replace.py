"""
Bulk Replace - Swap the whole movie collection in one transaction
"""

import asyncio
import enum
from typing import Any, Dict, List, Sequence

from sqlalchemy import delete, insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from moviepin.core.logging import get_logger
from moviepin.models import Movie

logger = get_logger(__name__)


class InsertOutcome(str, enum.Enum):
    INSERTED = "inserted"
    FAILED = "failed"
    # The transaction was already doomed when this insert's turn came
    ABORTED = "aborted"


class ReplaceMoviesError(Exception):
    """Raised when the collection could not be replaced, nothing was changed"""

    def __init__(self, failed: int, aborted: int):
        self.failed = failed
        self.aborted = aborted
        super().__init__(
            f"failed to replace movies: {failed} insert(s) failed, {aborted} aborted"
        )


class BulkReplace:
    """
    Deletes every movie and inserts a new collection, all or nothing.

    The coordinating task owns the session and its transaction. One
    sub-task is spawned per row; sub-tasks take turns on the connection
    through a lock and only report an ``InsertOutcome``. After the first
    failure the remaining sub-tasks stop touching the transaction and
    report ``ABORTED``. The coordinator waits for every sub-task, then
    commits once if nothing failed and rolls back once otherwise.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def run(self, rows: Sequence[Dict[str, Any]]) -> None:
        async with self.session_factory() as session:
            async with session.begin():
                # A failed delete leaves the block and rolls back straight away
                await session.execute(delete(Movie))

                outcomes = await self._insert_all(session, rows)

                failed = outcomes.count(InsertOutcome.FAILED)
                aborted = outcomes.count(InsertOutcome.ABORTED)
                if failed:
                    logger.error(
                        "Replacing movies failed, rolling back",
                        total=len(rows),
                        failed=failed,
                        aborted=aborted,
                    )
                    raise ReplaceMoviesError(failed, aborted)

        logger.info("Replaced movies", total=len(rows))

    async def _insert_all(
        self, session: AsyncSession, rows: Sequence[Dict[str, Any]]
    ) -> List[InsertOutcome]:
        turn = asyncio.Lock()
        doomed = asyncio.Event()

        async def insert_row(row: Dict[str, Any]) -> InsertOutcome:
            async with turn:
                if doomed.is_set():
                    return InsertOutcome.ABORTED
                try:
                    await session.execute(insert(Movie).values(**row))
                except Exception as e:
                    logger.error("Failed to insert movie", movie_id=str(row.get("id")), error=str(e))
                    doomed.set()
                    return InsertOutcome.FAILED
                return InsertOutcome.INSERTED

        return list(await asyncio.gather(*(insert_row(row) for row in rows)))
