"""
MongoDB College Statistics Repository - Infrastructure Layer

Reads colleges, yearly statistics and monthly expenses from MongoDB.
Documents are written by the surrounding administration tooling; this
service only reads them.
"""

from typing import Any, Dict, List, Optional

from campus_forecast.domain.entities.statistics import (
    College,
    CollegeMonthExpense,
    CollegeYearStat,
)
from campus_forecast.domain.repositories.college_stats_repository import (
    ICollegeStatsRepository,
)
from campus_forecast.infrastructure.database import MongoDatabase
from campus_forecast.infrastructure.database.mongo_database import (
    COLLEGES_COLLECTION,
    MONTH_EXPENSES_COLLECTION,
    YEAR_STATS_COLLECTION,
)


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


class CollegeStatsRepository(ICollegeStatsRepository):
    """MongoDB implementation of the college statistics source."""

    def __init__(self, mongo_database: MongoDatabase):
        self.db = mongo_database

    @staticmethod
    def _scope_query(college_id: Optional[int]) -> Dict[str, Any]:
        return {} if college_id is None else {"college_id": college_id}

    async def find_college(self, college_id: int) -> Optional[College]:
        document = await self.db.find_one(COLLEGES_COLLECTION, {"id": college_id})
        if document is None:
            return None
        return College(
            id=int(document["id"]),
            name=document.get("name") or "",
            max_students_capacity=_optional_int(
                document.get("max_students_capacity")
            ),
            max_annual_revenue=_optional_float(document.get("max_annual_revenue")),
        )

    async def get_year_stats(
        self, college_id: Optional[int] = None
    ) -> List[CollegeYearStat]:
        documents = await self.db.find_many(
            YEAR_STATS_COLLECTION,
            self._scope_query(college_id),
            sort_by="year",
            limit=None,
        )
        return [
            CollegeYearStat(
                college_id=int(document["college_id"]),
                year=int(document["year"]),
                annual_revenue=_optional_float(document.get("annual_revenue")),
                annual_students=_optional_int(document.get("annual_students")),
            )
            for document in documents
        ]

    async def get_month_expenses(
        self, college_id: Optional[int] = None
    ) -> List[CollegeMonthExpense]:
        documents = await self.db.find_many(
            MONTH_EXPENSES_COLLECTION,
            self._scope_query(college_id),
            sort_by="year",
            limit=None,
        )
        return [
            CollegeMonthExpense(
                college_id=int(document["college_id"]),
                year=int(document["year"]),
                month=int(document["month"]),
                expenses=float(document["expenses"]),
                description=document.get("description"),
            )
            for document in documents
        ]
