import pytest

from wanderai.api.budget import BudgetAllocator


@pytest.fixture
def allocator():
    return BudgetAllocator()


def test_per_day_is_floored(allocator):
    alloc = allocator.allocate(1000, 3, "hard")
    assert alloc.per_day == 333
    assert alloc.activity_envelope == 333


@pytest.mark.parametrize("pace,fraction", [("easy", 0.70), ("medium", 0.85), ("hard", 1.00)])
def test_pace_fraction(allocator, pace, fraction):
    alloc = allocator.allocate(10000, 10, pace)
    assert alloc.activity_fraction == fraction
    assert alloc.activity_envelope == int(1000 * fraction)


def test_lodging_is_budgeted_before_activities(allocator):
    # 2 nights at 1500 spread over 3 days = 1000/day
    alloc = allocator.allocate(9000, 3, "hard", nightly_rate=1500, nights=2)
    assert alloc.lodging_per_day == 1000
    assert alloc.activity_envelope == 2000


def test_budget_below_lodging_clamps_to_zero(allocator):
    alloc = allocator.allocate(8325, 14, "medium", nightly_rate=2498, nights=13)
    assert alloc.per_day == 594
    assert alloc.activity_envelope == 0


def test_invalid_inputs(allocator):
    with pytest.raises(ValueError):
        allocator.allocate(1000, 0, "easy")
    with pytest.raises(ValueError):
        allocator.allocate(1000, 2, "extreme")


def test_estimate_cost_uses_price_table(allocator):
    assert allocator.estimate_cost("attraction", 1) == 50
    assert allocator.estimate_cost("dining", 2) == 800
    assert allocator.estimate_cost("activity", 4) == 1500
    assert allocator.estimate_cost("attraction", 9) == 1000
    assert allocator.estimate_cost("unknown", 0) == 0


def test_lodging_is_never_estimated(allocator):
    with pytest.raises(ValueError):
        allocator.estimate_cost("lodging", 2)


def test_price_table_is_configurable():
    allocator = BudgetAllocator({"attraction": [1, 2], "dining": [3, 4]})
    assert allocator.estimate_cost("dining", 4) == 4
