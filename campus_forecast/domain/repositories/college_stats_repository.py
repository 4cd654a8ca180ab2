"""
College Statistics Repository Interface

Read-only access to the stored college statistics used to assemble
forecast series.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from campus_forecast.domain.entities.statistics import (
    College,
    CollegeMonthExpense,
    CollegeYearStat,
)


class ICollegeStatsRepository(ABC):
    """Interface for college statistics sources."""

    @abstractmethod
    async def find_college(self, college_id: int) -> Optional[College]:
        """Return the college with ``college_id`` or None."""
        pass

    @abstractmethod
    async def get_year_stats(
        self, college_id: Optional[int] = None
    ) -> List[CollegeYearStat]:
        """
        Return yearly statistics.

        Args:
            college_id: Restrict to one college; all colleges when None
        """
        pass

    @abstractmethod
    async def get_month_expenses(
        self, college_id: Optional[int] = None
    ) -> List[CollegeMonthExpense]:
        """
        Return monthly expense rows.

        Args:
            college_id: Restrict to one college; all colleges when None
        """
        pass
