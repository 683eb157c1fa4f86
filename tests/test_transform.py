from datetime import datetime, timezone

from conftest import make_log

from strong_export.models import RawLog, Workout, WorkoutSet
from strong_export.transform import count_sets, filter_by_date_range, transform_logs

MEASUREMENTS = {"abc123": "Squat (Barbell)"}


def raw(**overrides):
    return RawLog.from_json(make_log(**overrides))


def group(href, *cell_sets):
    return {"_links": {"measurement": {"href": href}}, "cellSets": list(cell_sets)}


def test_transforms_a_basic_workout_log():
    [workout] = transform_logs([raw()], MEASUREMENTS)
    assert workout.id == "log-1"
    assert workout.start_date == "2026-01-01T10:00:00Z"
    assert len(workout.exercises) == 1
    exercise = workout.exercises[0]
    assert exercise.name == "Squat (Barbell)"
    assert exercise.completed_sets == (WorkoutSet(weight_kg=100.0, reps=5),)
    assert exercise.skipped_sets == ()


def test_unmapped_measurement_is_unknown():
    [workout] = transform_logs([raw()], {})
    assert workout.exercises[0].name == "Unknown"


def test_only_workout_and_log_types_survive():
    logs = [raw(logType="MEASUREMENT"), raw(log_id="log-2", logType="LOG"), raw(log_id="log-3", logType=None)]
    assert [w.id for w in transform_logs(logs, MEASUREMENTS)] == ["log-2"]


def test_output_is_reverse_of_input_order():
    logs = [raw(log_id=f"log-{i}") for i in range(1, 4)]
    logs.insert(1, raw(log_id="body-weight", logType="MEASUREMENT"))
    assert [w.id for w in transform_logs(logs, MEASUREMENTS)] == ["log-3", "log-2", "log-1"]


def test_exercise_with_only_timers_and_notes_is_dropped():
    log = raw(
        _embedded={
            "cellSetGroup": [
                group(
                    "/api/measurements/abc123",
                    {"cells": [{"cellType": "REST_TIMER", "value": "60"}]},
                    {"cells": [{"cellType": "NOTE", "value": "felt heavy"}]},
                )
            ]
        }
    )
    [workout] = transform_logs([log], MEASUREMENTS)
    assert workout.exercises == ()


def test_splits_completed_and_skipped_preserving_order():
    log = raw(
        _embedded={
            "cellSetGroup": [
                group(
                    "/api/measurements/abc123",
                    {"cells": [{"cellType": "BARBELL_WEIGHT", "value": "100"}], "isCompleted": True},
                    {"cells": [{"cellType": "BARBELL_WEIGHT", "value": "110"}], "isCompleted": False},
                    {"cells": [{"cellType": "BARBELL_WEIGHT", "value": "105"}]},
                    {"cells": [{"cellType": "BARBELL_WEIGHT", "value": "115"}], "isCompleted": False},
                )
            ]
        }
    )
    [workout] = transform_logs([log], MEASUREMENTS)
    exercise = workout.exercises[0]
    assert [s.weight_kg for s in exercise.completed_sets] == [100.0, 105.0]
    assert [s.weight_kg for s in exercise.skipped_sets] == [110.0, 115.0]


def test_workout_name_prefers_english_then_custom():
    assert transform_logs([raw(name={"en": "Leg Day", "custom": "Mine"})], {})[0].name == "Leg Day"
    assert transform_logs([raw(name={"custom": "My Workout"})], {})[0].name == "My Workout"
    assert transform_logs([raw(name=None)], {})[0].name is None


def test_measurement_id_is_last_path_segment():
    log = raw(
        _embedded={
            "cellSetGroup": [
                group(
                    "https://back.strong.app/api/users/u1/measurements/custom-9",
                    {"cells": [{"cellType": "REPS", "value": "12"}]},
                )
            ]
        }
    )
    [workout] = transform_logs([log], {"custom-9": "Cable Fly"})
    assert workout.exercises[0].name == "Cable Fly"


def test_transform_is_repeatable():
    logs = [raw(), raw(log_id="log-2", logType="LOG")]
    assert transform_logs(logs, MEASUREMENTS) == transform_logs(logs, MEASUREMENTS)


def test_count_sets():
    workouts = transform_logs([raw(), raw(log_id="log-2")], MEASUREMENTS)
    assert count_sets(workouts) == 2


def test_date_filter_bounds_are_inclusive():
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    end = datetime(2026, 1, 31, 23, 59, 59, tzinfo=timezone.utc)
    workouts = [
        Workout(id="on-start", start_date="2026-01-01T00:00:00Z"),
        Workout(id="on-end", start_date="2026-01-31T23:59:59Z"),
        Workout(id="before", start_date="2025-12-31T23:59:59Z"),
        Workout(id="after", start_date="2026-02-01T00:00:00Z"),
        Workout(id="undated"),
        Workout(id="garbled", start_date="yesterday"),
    ]
    kept = filter_by_date_range(workouts, start, end)
    assert [w.id for w in kept] == ["on-start", "on-end"]


def test_date_filter_treats_naive_bounds_as_utc():
    workouts = [Workout(id="w", start_date="2026-03-10T08:00:00+00:00")]
    assert filter_by_date_range(workouts, datetime(2026, 3, 10, 8), datetime(2026, 3, 10, 8)) == workouts
