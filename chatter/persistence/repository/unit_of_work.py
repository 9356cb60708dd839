"""PostgreSQL unit of work."""

from sqlalchemy.ext.asyncio import AsyncSession

from chatter.domain.repository import UnitOfWork
from chatter.persistence.database import store_errors


class PostgresUnitOfWork(UnitOfWork):
    """Commits the request's session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        async with store_errors("commit"):
            await self.session.commit()
