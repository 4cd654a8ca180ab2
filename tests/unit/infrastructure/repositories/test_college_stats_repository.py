from __future__ import annotations

from typing import cast

import pytest

from campus_forecast.domain.entities.statistics import College
from campus_forecast.infrastructure.database.mongo_database import MongoDatabase
from campus_forecast.infrastructure.repositories.college_stats_repository import (
    CollegeStatsRepository,
)
from tests.conftest import FakeMongoDatabase


@pytest.fixture()
def repository(seeded_mongo_database: FakeMongoDatabase) -> CollegeStatsRepository:
    return CollegeStatsRepository(cast(MongoDatabase, seeded_mongo_database))


@pytest.mark.asyncio
async def test_find_college(repository: CollegeStatsRepository) -> None:
    college = await repository.find_college(1)

    assert college == College(id=1, name="Engineering", max_students_capacity=500)
    assert await repository.find_college(42) is None


@pytest.mark.asyncio
async def test_year_stats_scoped_to_college(repository: CollegeStatsRepository) -> None:
    stats = await repository.get_year_stats(1)

    assert [stat.year for stat in stats] == [2021, 2022, 2023, 2024]
    assert all(stat.college_id == 1 for stat in stats)


@pytest.mark.asyncio
async def test_year_stats_for_university_return_everything(
    repository: CollegeStatsRepository,
) -> None:
    stats = await repository.get_year_stats()

    assert len(stats) == 6
    missing_revenue = [stat for stat in stats if stat.annual_revenue is None]
    assert [(stat.college_id, stat.year) for stat in missing_revenue] == [(2, 2023)]


@pytest.mark.asyncio
async def test_month_expenses(repository: CollegeStatsRepository) -> None:
    expenses = await repository.get_month_expenses(2)

    assert sorted((row.year, row.month, row.expenses) for row in expenses) == [
        (2021, 12, 7.0),
        (2022, 1, 40.0),
    ]


@pytest.mark.asyncio
async def test_stats_are_not_truncated(seeded_mongo_database: FakeMongoDatabase) -> None:
    seeded_mongo_database.seed(
        "college_month_expenses",
        [
            {"college_id": 3, "year": 2000 + i // 12, "month": i % 12 + 1, "expenses": 1}
            for i in range(150)
        ],
    )
    repository = CollegeStatsRepository(cast(MongoDatabase, seeded_mongo_database))

    assert len(await repository.get_month_expenses(3)) == 150
