from __future__ import annotations

from orbit_sandbox.app.scheduler import OrbitUpdateScheduler


def test_selected_first_then_round_robin() -> None:
    scheduler = OrbitUpdateScheduler(budget=3)
    ids = [1, 2, 3, 4, 5]
    assert scheduler.plan(ids, 3) == [3, 1, 2, 4]
    assert scheduler.plan(ids, 3) == [3, 5, 1, 2]


def test_no_selection_visits_everyone() -> None:
    scheduler = OrbitUpdateScheduler(budget=2)
    ids = [10, 11, 12, 13, 14]
    seen: set[int] = set()
    for _ in range(3):
        seen.update(scheduler.plan(ids))
    assert seen == set(ids)


def test_empty_and_small_collections() -> None:
    scheduler = OrbitUpdateScheduler(budget=3)
    assert scheduler.plan([]) == []
    assert scheduler.plan([], 4) == []
    assert scheduler.plan([7], 7) == [7]
    assert sorted(scheduler.plan([7, 8])) == [7, 8]


def test_plan_never_repeats_ids() -> None:
    scheduler = OrbitUpdateScheduler(budget=10)
    ids = [1, 2, 3, 4]
    for selected in (None, 1, 4, 99):
        plan = scheduler.plan(ids, selected)
        assert len(plan) == len(set(plan))
        assert set(plan) == set(ids)


def test_unknown_selection_is_ignored() -> None:
    scheduler = OrbitUpdateScheduler(budget=1)
    assert scheduler.plan([1, 2], 42) == [1]


def test_zero_budget_refreshes_only_selected() -> None:
    scheduler = OrbitUpdateScheduler(budget=0)
    assert scheduler.plan([1, 2, 3], 2) == [2]
    assert scheduler.plan([1, 2, 3]) == []
