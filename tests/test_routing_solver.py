import numpy as np
import pytest

from src.camproute.services.planning.models import DrivingLimits
from src.camproute.services.routing.solver import (
    CampsiteRule,
    TourProblem,
    build_order,
    max_two_opt_passes,
    nearest_neighbor_sequence,
    route_distance_km,
    solve_sequence,
    tour_cost,
    two_opt,
)

LIMITS = DrivingLimits(
    max_daily_distance_km=500,
    max_daily_driving_time_hours=8,
    average_speed_kmh=70,
    recommended_break_interval_hours=2,
    break_duration_minutes=15,
)


def _line_problem(positions: list[float], anchors: dict[int, int] | None = None) -> TourProblem:
    """Stops on a straight line, so distances are plain differences."""
    coords = np.asarray(positions, dtype=float)
    distances = np.abs(coords[:, np.newaxis] - coords[np.newaxis, :])
    size = len(positions)
    return TourProblem(
        keys=[f"p{i}" for i in range(size)],
        distances=distances,
        average_speed_kmh=70,
        anchors=anchors if anchors is not None else {0: 0, size - 1: size - 1},
        distance_weight=1.0,
        time_weight=0.0,
    )


def test_build_order_fills_free_slots():
    problem = _line_problem([0, 30, 10, 20, 40], anchors={0: 0, 2: 2, 4: 4})
    assert problem.movable == [1, 3]
    assert build_order(problem, [3, 1]) == [0, 3, 2, 1, 4]


def test_route_distance():
    problem = _line_problem([0, 30, 10, 20, 40])
    assert route_distance_km(problem, [0, 1, 2, 3, 4]) == pytest.approx(30 + 20 + 10 + 20)
    assert route_distance_km(problem, [0]) == 0


def test_nearest_neighbor_follows_the_line():
    problem = _line_problem([0, 30, 10, 20, 40])
    assert nearest_neighbor_sequence(problem) == [2, 3, 1]


def test_nearest_neighbor_breaks_ties_by_key():
    problem = _line_problem([0, 10, -10, 50])
    problem.keys = ["start", "zulu", "alpha", "end"]
    assert nearest_neighbor_sequence(problem)[0] == 2


def test_two_opt_reaches_the_ordered_line():
    problem = _line_problem([0, 30, 10, 20, 40])
    result = two_opt(problem, [1, 2, 3])

    assert build_order(problem, result.sequence) == [0, 2, 3, 1, 4]
    assert result.cost == pytest.approx(40)
    assert result.converged is True
    assert result.iterations >= 1


def test_two_opt_with_a_single_free_stop():
    problem = _line_problem([0, 30, 40])
    result = two_opt(problem, [1])
    assert result.sequence == [1]
    assert result.iterations == 0


def test_solve_sequence_prefers_input_on_ties():
    problem = _line_problem([0, 10, 10, 40])
    order, _, converged = solve_sequence(problem, [2, 1])
    assert order == [0, 2, 1, 3]
    assert converged is True


def test_pass_cap():
    assert max_two_opt_passes(3) == 9
    assert max_two_opt_passes(1000) == 1000


def test_normalised_cost():
    problem = _line_problem([0, 30, 10, 20, 40])
    problem.reference_distance_km = 40
    assert tour_cost(problem, [0, 2, 3, 1, 4]) == pytest.approx(1.0)


def test_campsite_penalty_for_overnight_away_from_campsites():
    problem = _line_problem([0, 400, 800])
    problem.campsite_rule = CampsiteRule(campsite_indices=[], max_distance_km=50, limits=LIMITS, penalty=0.25)
    assert tour_cost(problem, [0, 1, 2]) == pytest.approx(800 + 0.25)

    problem.campsite_rule = CampsiteRule(campsite_indices=[1], max_distance_km=50, limits=LIMITS, penalty=0.25)
    assert tour_cost(problem, [0, 1, 2]) == pytest.approx(800)


def test_single_day_needs_no_campsite():
    problem = _line_problem([0, 100, 200])
    problem.campsite_rule = CampsiteRule(campsite_indices=[], max_distance_km=50, limits=LIMITS, penalty=0.25)
    assert tour_cost(problem, [0, 1, 2]) == pytest.approx(200)


def _campsite_line_problem() -> TourProblem:
    # The shortest order ends its first day at 250 km, 50 km past the campsite at 200 km.
    problem = _line_problem([0, 100, 200, 250, 700])
    problem.reference_distance_km = 700
    problem.campsite_rule = CampsiteRule(campsite_indices=[2], max_distance_km=30, limits=LIMITS, penalty=0.25)
    return problem


def test_campsite_penalty_can_justify_a_longer_order():
    problem = _campsite_line_problem()
    result = two_opt(problem, [1, 2, 3])
    assert build_order(problem, result.sequence) == [0, 1, 3, 2, 4]
    assert route_distance_km(problem, build_order(problem, result.sequence)) == pytest.approx(800)


def test_distance_cap_blocks_longer_orders():
    problem = _campsite_line_problem()
    problem.distance_cap_km = 700
    result = two_opt(problem, [1, 2, 3])
    assert build_order(problem, result.sequence) == [0, 1, 2, 3, 4]

    order, _, _ = solve_sequence(problem, [1, 2, 3])
    assert route_distance_km(problem, order) <= 700


def test_search_above_the_cap_still_shrinks():
    problem = _line_problem([0, 30, 10, 20, 40])
    problem.distance_cap_km = 10
    result = two_opt(problem, [1, 2, 3])
    assert build_order(problem, result.sequence) == [0, 2, 3, 1, 4]
