"""Daily rollover: meals only live for the local day they were logged on."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from fridge_macros.services.dates import local_today, seconds_until_next_local_midnight
from fridge_macros.services.meals import MealLogService

_logger = logging.getLogger(__name__)


@dataclass
class DailyRolloverService:
    """Purges stale meals at startup and after every local midnight."""

    meal_service: MealLogService
    timezone: str = "UTC"
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, repr=False)

    def run_cleanup(self) -> int:
        """Delete meals from other days; failures are logged, never raised."""
        today = local_today(self.timezone)
        try:
            purged = self.meal_service.purge_meals_not_on(today)
        except Exception:
            _logger.exception("Daily meal cleanup failed")
            return 0
        _logger.info("Daily meal cleanup: today=%s purged=%s", today, purged)
        return purged

    async def run_forever(self) -> None:
        """Sleep until each local midnight and clean up again."""
        while True:
            await self.sleep(seconds_until_next_local_midnight(self.timezone) + 1)
            self.run_cleanup()
