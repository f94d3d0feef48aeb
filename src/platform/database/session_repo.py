from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy.ext.asyncio import AsyncSession


SessionFactory = Callable[..., AsyncContextManager[AsyncSession]]


class SessionRepo:
    """
    Base for SQLAlchemy repositories.

    A repository either owns short-lived sessions from `session_factory`
    (standalone reads) or shares the session injected by the unit of work,
    so several repositories write inside one transaction.
    """

    def __init__(self, session_factory: SessionFactory | None = None) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            # Injected by UoW: the UoW owns commit/rollback
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')
