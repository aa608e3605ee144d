# app/crud/transaction.py
from datetime import datetime, timezone
from typing import Callable, List

from sqlalchemy import desc, func
from sqlalchemy.future import select

from app.core.database import Database
from app.models.transaction import Transaction
from app.schemas.transaction import TransactionCreate


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TransactionStore:
    """Insert and list operations over the ``transactions`` collection."""

    def __init__(self, database: Database, clock: Callable[[], datetime] = utcnow):
        self.database = database
        self.clock = clock

    async def list_all(self) -> List[Transaction]:
        """Every stored transaction, most recently created first."""
        sessionmaker = await self.database.acquire()
        async with sessionmaker() as db:
            result = await db.execute(
                select(Transaction).order_by(desc(Transaction.created_at))
            )
            return list(result.scalars().all())

    async def create(self, tx_in: TransactionCreate) -> Transaction:
        now = self.clock()
        new_tx = Transaction(**tx_in.model_dump(), created_at=now, updated_at=now)
        sessionmaker = await self.database.acquire()
        async with sessionmaker() as db:
            db.add(new_tx)
            await db.commit()
            await db.refresh(new_tx)
        return new_tx

    async def count(self) -> int:
        sessionmaker = await self.database.acquire()
        async with sessionmaker() as db:
            result = await db.execute(select(func.count()).select_from(Transaction))
            return result.scalar_one()
