from __future__ import annotations

from datetime import date

from campus_forecast.domain.entities.errors import (
    CollegeNotFoundError,
    InsufficientDataError,
    PredictionNotFoundError,
    PredictionValidationError,
)
from campus_forecast.domain.entities.prediction import (
    MetricKind,
    Prediction,
    Scope,
    ScopeType,
    SeriesSource,
)


def test_replace_observations_sorts_and_numbers_points() -> None:
    prediction = Prediction()
    prediction.replace_observations(
        [(date(2023, 1, 1), 3), (date(2021, 1, 1), 1), (date(2022, 1, 1), 2)]
    )

    assert [item.index for item in prediction.observations] == [1, 2, 3]
    assert prediction.observed_values() == [1.0, 2.0, 3.0]
    assert prediction.start_date == date(2021, 1, 1)
    last = prediction.last_observation()
    assert last is not None and last.period == date(2023, 1, 1)


def test_empty_prediction_has_no_start_date() -> None:
    prediction = Prediction()

    assert prediction.start_date is None
    assert prediction.last_observation() is None


def test_bounds_apply_only_to_aggregate_metric_series(sample_prediction) -> None:
    assert sample_prediction.applies_bounds is True

    sample_prediction.source = SeriesSource.DIRECT
    assert sample_prediction.applies_bounds is False

    assert Prediction(metric=None).applies_bounds is False


def test_scope_aggregate_flag() -> None:
    assert Scope().is_aggregate is True
    assert Scope(scope_type=ScopeType.COLLEGE, scope_id=1).is_aggregate is False


def test_error_details() -> None:
    error = InsufficientDataError(2, 3)

    assert isinstance(error, PredictionValidationError)
    assert error.details == {"available_points": 2, "required_points": 3}
    assert "2 point(s)" in error.message

    college_error = CollegeNotFoundError(7)
    assert isinstance(college_error, PredictionNotFoundError)
    assert str(college_error) == "College with ID 7 not found"


def test_metric_values_match_wire_names() -> None:
    assert [metric.value for metric in MetricKind] == [
        "revenue",
        "expenses",
        "profit",
        "students",
    ]
