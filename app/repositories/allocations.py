"""
Allocation repository — seeds a random portfolio split for new users.
"""

from __future__ import annotations

import random

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.allocation import Allocation


class AllocationRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_user_id(self, user_id: int) -> Allocation | None:
        result = await self.db.execute(select(Allocation).where(Allocation.user_id == user_id))
        return result.scalar_one_or_none()

    async def update(self, user_id: int, stocks: int, funds: int, bonds: int) -> Allocation:
        """Upsert the allocation row for ``user_id``."""
        allocation = await self.get_by_user_id(user_id)
        if allocation is None:
            allocation = Allocation(user_id=user_id)
            self.db.add(allocation)
        allocation.stocks = stocks
        allocation.funds = funds
        allocation.bonds = bonds
        await self.db.commit()
        await self.db.refresh(allocation)
        return allocation

    async def prepare_user_data(self, user_id: int) -> Allocation:
        """Give a freshly created user a random split that sums to 100."""
        stocks = random.randint(1, 40)
        funds = random.randint(1, 40)
        return await self.update(user_id, stocks, funds, 100 - (stocks + funds))
