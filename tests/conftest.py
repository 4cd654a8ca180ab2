from __future__ import annotations

import sys
from datetime import date, datetime, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Sequence
from uuid import uuid4

import pytest

from campus_forecast.domain.entities.prediction import (
    ForecastPoint,
    MetricKind,
    Observation,
    PeriodType,
    Prediction,
    Scope,
    ScopeType,
    SeriesSource,
)
from campus_forecast.domain.entities.statistics import (
    College,
    CollegeMonthExpense,
    CollegeYearStat,
)
from campus_forecast.infrastructure.database.mongo_database import DocumentNotFoundError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def colleges() -> List[College]:
    return [
        College(id=1, name="Engineering", max_students_capacity=500),
        College(id=2, name="Medicine", max_annual_revenue=1_000_000.0),
    ]


@pytest.fixture()
def year_stats() -> List[CollegeYearStat]:
    return [
        CollegeYearStat(college_id=1, year=2021, annual_revenue=100.0, annual_students=300),
        CollegeYearStat(college_id=1, year=2022, annual_revenue=200.0, annual_students=350),
        CollegeYearStat(college_id=1, year=2023, annual_revenue=300.0, annual_students=400),
        CollegeYearStat(college_id=1, year=2024, annual_revenue=400.0, annual_students=450),
        CollegeYearStat(college_id=2, year=2022, annual_revenue=1200.0),
        CollegeYearStat(college_id=2, year=2023, annual_revenue=None, annual_students=80),
    ]


@pytest.fixture()
def month_expenses() -> List[CollegeMonthExpense]:
    return [
        CollegeMonthExpense(college_id=1, year=2022, month=1, expenses=5.0),
        CollegeMonthExpense(college_id=1, year=2022, month=1, expenses=3.0),
        CollegeMonthExpense(college_id=1, year=2022, month=2, expenses=4.0),
        CollegeMonthExpense(college_id=2, year=2022, month=1, expenses=40.0),
        CollegeMonthExpense(college_id=2, year=2021, month=12, expenses=7.0),
    ]


@pytest.fixture()
def sample_prediction() -> Prediction:
    return Prediction(
        id=uuid4(),
        owner_id="owner-1",
        title="Students outlook",
        description="Yearly headcount",
        scope=Scope(scope_type=ScopeType.COLLEGE, scope_id=1),
        metric=MetricKind.STUDENTS,
        source=SeriesSource.AGGREGATE,
        period_type=PeriodType.YEARLY,
        future_steps=2,
        observations=[
            Observation(index=1, value=300.0, period=date(2021, 1, 1)),
            Observation(index=2, value=350.0, period=date(2022, 1, 1)),
            Observation(index=3, value=400.0, period=date(2023, 1, 1)),
        ],
        forecast_points=[
            ForecastPoint(index=4, predicted_value=450.0, period=date(2024, 1, 1)),
            ForecastPoint(index=5, predicted_value=500.0, period=date(2025, 1, 1)),
        ],
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = list(documents)
        self._skip = 0
        self._limit: int | None = None

    def sort(self, key: Any = None, direction: int = 1) -> "FakeCursor":
        if key:
            self._documents.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
        return self

    def skip(self, amount: int) -> "FakeCursor":
        self._skip = amount
        return self

    def limit(self, amount: int) -> "FakeCursor":
        self._limit = amount
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        docs = self._documents[self._skip :]
        if self._limit:
            docs = docs[: self._limit]
        return iter(docs)


class FakeCollection:
    def __init__(self) -> None:
        self.documents: List[Dict[str, Any]] = []
        self.inserts: List[Dict[str, Any]] = []
        self.replacements: List[Dict[str, Any]] = []
        self.created_indexes: List[tuple[Any, ...]] = []

    def find_one(self, query: Dict[str, Any]) -> Dict[str, Any] | None:
        for document in self.documents:
            if self._matches(document, query):
                return document
        return None

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        return FakeCursor([doc for doc in self.documents if self._matches(doc, query)])

    def insert_one(self, document: Dict[str, Any]) -> Any:
        self.inserts.append(document)
        self.documents.append(document)
        return SimpleNamespace(acknowledged=True)

    def replace_one(self, query: Dict[str, Any], document: Dict[str, Any]) -> Any:
        for position, existing in enumerate(self.documents):
            if self._matches(existing, query):
                self.documents[position] = document
                self.replacements.append(document)
                return SimpleNamespace(matched_count=1, acknowledged=True)
        return SimpleNamespace(matched_count=0, acknowledged=False)

    def delete_one(self, query: Dict[str, Any]) -> Any:
        for position, existing in enumerate(self.documents):
            if self._matches(existing, query):
                del self.documents[position]
                return SimpleNamespace(deleted_count=1, acknowledged=True)
        return SimpleNamespace(deleted_count=0, acknowledged=False)

    def create_index(self, keys: Any, name: str | None = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys

    @staticmethod
    def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        return all(document.get(key) == value for key, value in query.items())


class FakeMongoDatabase:
    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    def seed(self, collection_name: str, documents: Sequence[Dict[str, Any]]) -> None:
        self.get_collection(collection_name).documents.extend(
            dict(document) for document in documents
        )

    async def find_one(self, collection_name: str, query: Dict[str, Any]) -> Any:
        return self.get_collection(collection_name).find_one(query)

    async def find_many(
        self,
        collection_name: str,
        query: Dict[str, Any],
        sort_by: str | None = None,
        sort_direction: int = 1,
        skip: int = 0,
        limit: int | None = 100,
    ) -> List[Dict[str, Any]]:
        cursor = self.get_collection(collection_name).find(query)
        cursor.sort(sort_by, sort_direction)
        cursor.skip(skip)
        if limit is not None:
            cursor.limit(limit)
        return list(cursor)

    async def insert_one(self, collection_name: str, document: Dict[str, Any]) -> Any:
        self.get_collection(collection_name).insert_one(document)
        return document

    async def replace_one(
        self, collection_name: str, query: Dict[str, Any], document: Dict[str, Any]
    ) -> Any:
        result = self.get_collection(collection_name).replace_one(query, document)
        if getattr(result, "matched_count", 0) == 0:
            raise DocumentNotFoundError(collection_name, query)
        return document

    async def delete_one(self, collection_name: str, query: Dict[str, Any]) -> Any:
        result = self.get_collection(collection_name).delete_one(query)
        if getattr(result, "deleted_count", 0) == 0:
            raise DocumentNotFoundError(collection_name, query)
        return None

    async def create_indexes(self) -> None:  # pragma: no cover - stub for tests
        pass

    def close(self) -> None:
        pass


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def seeded_mongo_database(
    fake_mongo_database: FakeMongoDatabase,
    colleges: List[College],
    year_stats: List[CollegeYearStat],
    month_expenses: List[CollegeMonthExpense],
) -> FakeMongoDatabase:
    fake_mongo_database.seed(
        "colleges",
        [
            {
                "id": college.id,
                "name": college.name,
                "max_students_capacity": college.max_students_capacity,
                "max_annual_revenue": college.max_annual_revenue,
            }
            for college in colleges
        ],
    )
    fake_mongo_database.seed(
        "college_year_stats",
        [
            {
                "college_id": stat.college_id,
                "year": stat.year,
                "annual_revenue": stat.annual_revenue,
                "annual_students": stat.annual_students,
            }
            for stat in year_stats
        ],
    )
    fake_mongo_database.seed(
        "college_month_expenses",
        [
            {
                "college_id": expense.college_id,
                "year": expense.year,
                "month": expense.month,
                "expenses": expense.expenses,
                "description": expense.description,
            }
            for expense in month_expenses
        ],
    )
    return fake_mongo_database
