from typing import Callable

import anyio
from anyio.abc import TaskGroup

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.release_expired_cart_items_use_case import (
    ReleaseExpiredCartItemsUseCase,
)


class ExpiredCartSweeper:
    """Periodically returns expired cart reservations to their time slots"""

    def __init__(
        self,
        *,
        release_expired: ReleaseExpiredCartItemsUseCase,
        uow_factory: Callable[[], AbstractUnitOfWork],
        interval_seconds: float,
    ) -> None:
        self.release_expired = release_expired
        self.uow_factory = uow_factory
        self.interval_seconds = interval_seconds

    async def start(self, *, task_group: TaskGroup) -> None:
        if self.interval_seconds <= 0:
            Logger.base.info('⏸️ [Cart Sweeper] Disabled (interval <= 0)')
            return
        task_group.start_soon(self._sweep_loop)  # pyrefly: ignore[bad-argument-type]
        Logger.base.info(f'🧹 [Cart Sweeper] Started, every {self.interval_seconds}s')

    async def sweep_once(self) -> int:
        return await self.release_expired.execute(uow=self.uow_factory(), trigger='sweeper')

    async def _sweep_loop(self) -> None:
        while True:
            try:
                released = await self.sweep_once()
                if released:
                    Logger.base.info(f'🧹 [Cart Sweeper] Released {released} expired item(s)')
            except Exception as e:
                # Keep sweeping; lazy release on cart reads still covers the gap
                Logger.base.error(f'❌ [Cart Sweeper] Sweep failed: {e}')
            await anyio.sleep(self.interval_seconds)
