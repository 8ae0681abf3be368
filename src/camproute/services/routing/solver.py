"""Nearest-neighbor construction and 2-opt improvement for stop sequencing.

The search works on slot templates: anchored slots (start, fixed end, locked
stops) always hold the same waypoint and the remaining waypoints are
permuted through the free slots. Only the free sequence is ever reversed, so
anchors never move.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from ...config import settings
from ..planning.models import DrivingLimits
from ..planning.stages import group_by_day

# Minimum objective gain for a swap to count as an improvement.
IMPROVEMENT_EPSILON = 1e-9


@dataclass(slots=True)
class CampsiteRule:
    """Soft constraint: each overnight stop should be near a campsite."""

    campsite_indices: list[int]
    max_distance_km: float
    limits: DrivingLimits
    penalty: float = field(default_factory=lambda: settings.campsite_penalty)


@dataclass(slots=True)
class TourProblem:
    keys: list[str]
    distances: np.ndarray
    average_speed_kmh: float
    anchors: dict[int, int]
    distance_weight: float
    time_weight: float
    campsite_rule: CampsiteRule | None = None
    reference_distance_km: float = 1.0
    reference_time_hours: float = 1.0
    # Orders longer than this are never accepted once the search is within it.
    distance_cap_km: float | None = None

    @property
    def size(self) -> int:
        return len(self.keys)

    @property
    def movable(self) -> list[int]:
        anchored = set(self.anchors.values())
        return [index for index in range(self.size) if index not in anchored]


@dataclass(slots=True)
class SearchResult:
    sequence: list[int]
    cost: float
    iterations: int
    converged: bool


def build_order(problem: TourProblem, sequence: Sequence[int]) -> list[int]:
    """Full route order with anchored slots filled and free slots taken from ``sequence``."""

    free = iter(sequence)
    return [problem.anchors[slot] if slot in problem.anchors else next(free) for slot in range(problem.size)]


def route_distance_km(problem: TourProblem, order: Sequence[int]) -> float:
    if len(order) < 2:
        return 0.0
    index = np.asarray(order)
    return float(problem.distances[index[:-1], index[1:]].sum())


def _campsite_penalty(problem: TourProblem, order: Sequence[int]) -> float:
    rule = problem.campsite_rule
    if rule is None or len(order) < 2:
        return 0.0
    index = np.asarray(order)
    legs = problem.distances[index[:-1], index[1:]]
    days = group_by_day(legs.tolist(), (legs / rule.limits.average_speed_kmh).tolist(), rule.limits)

    penalty = 0.0
    # The final day ends at the destination, which needs no campsite.
    for day in days[:-1]:
        overnight = order[day[-1] + 1]
        if rule.campsite_indices:
            nearest = float(problem.distances[overnight, rule.campsite_indices].min())
        else:
            nearest = float("inf")
        if nearest > rule.max_distance_km:
            penalty += rule.penalty
    return penalty


def tour_cost(problem: TourProblem, order: Sequence[int]) -> float:
    """Weighted, normalised distance/time objective plus soft-constraint penalties."""

    distance = route_distance_km(problem, order)
    hours = distance / problem.average_speed_kmh
    cost = (
        problem.distance_weight * distance / problem.reference_distance_km
        + problem.time_weight * hours / problem.reference_time_hours
    )
    return cost + _campsite_penalty(problem, order)


def _leg_cost(problem: TourProblem, origin: int, destination: int) -> float:
    distance = float(problem.distances[origin, destination])
    return (
        problem.distance_weight * distance / problem.reference_distance_km
        + problem.time_weight * (distance / problem.average_speed_kmh) / problem.reference_time_hours
    )


def nearest_neighbor_sequence(problem: TourProblem) -> list[int]:
    """Greedy construction from the start anchor; ties go to the smaller waypoint id."""

    remaining = set(problem.movable)
    sequence: list[int] = []
    previous: int | None = None
    for slot in range(problem.size):
        if slot in problem.anchors:
            previous = problem.anchors[slot]
            continue
        if previous is None:
            chosen = min(remaining, key=lambda candidate: problem.keys[candidate])
        else:
            origin = previous
            chosen = min(
                remaining,
                key=lambda candidate: (_leg_cost(problem, origin, candidate), problem.keys[candidate]),
            )
        remaining.remove(chosen)
        sequence.append(chosen)
        previous = chosen
    return sequence


def max_two_opt_passes(size: int) -> int:
    return max(1, min(size * size, settings.optimizer_max_iterations))


def within_cap(problem: TourProblem, distance_km: float) -> bool:
    return problem.distance_cap_km is None or distance_km <= problem.distance_cap_km


def two_opt(problem: TourProblem, sequence: Sequence[int]) -> SearchResult:
    """First-improvement 2-opt over the free sequence, bounded by a pass cap.

    With a distance cap, a move may not lengthen the route beyond
    ``max(cap, current distance)``: a search starting inside the cap stays
    inside it, one starting outside can only shrink toward it.
    """

    best = list(sequence)
    best_order = build_order(problem, best)
    best_cost = tour_cost(problem, best_order)
    best_distance = route_distance_km(problem, best_order)
    if len(best) < 2:
        return SearchResult(sequence=best, cost=best_cost, iterations=0, converged=True)

    max_passes = max_two_opt_passes(problem.size)
    passes = 0
    improved = True
    while improved and passes < max_passes:
        improved = False
        for i in range(len(best) - 1):
            for j in range(i + 1, len(best)):
                candidate = best[:i] + best[i : j + 1][::-1] + best[j + 1 :]
                order = build_order(problem, candidate)
                candidate_cost = tour_cost(problem, order)
                if candidate_cost >= best_cost - IMPROVEMENT_EPSILON:
                    continue
                candidate_distance = route_distance_km(problem, order)
                if candidate_distance > best_distance and not within_cap(problem, candidate_distance):
                    continue
                best = candidate
                best_cost = candidate_cost
                best_distance = candidate_distance
                improved = True
        passes += 1

    return SearchResult(sequence=best, cost=best_cost, iterations=passes, converged=not improved)


def solve_sequence(problem: TourProblem, initial_sequence: Sequence[int]) -> tuple[list[int], int, bool]:
    """Improve both the nearest-neighbor seed and the caller's ordering; keep the better one.

    Results within the problem's distance cap are preferred over cheaper ones outside it.

    Returns the best full route order, the total 2-opt pass count and whether
    both searches converged before hitting the pass cap.
    """

    seed = nearest_neighbor_sequence(problem)
    from_input = two_opt(problem, initial_sequence)
    from_seed = two_opt(problem, seed)

    seed_fits = within_cap(problem, route_distance_km(problem, build_order(problem, from_seed.sequence)))
    input_fits = within_cap(problem, route_distance_km(problem, build_order(problem, from_input.sequence)))
    # The caller's ordering wins ties so an already optimal route stays untouched.
    if seed_fits and (not input_fits or from_seed.cost < from_input.cost - IMPROVEMENT_EPSILON):
        best = from_seed
    else:
        best = from_input
    return (
        build_order(problem, best.sequence),
        from_input.iterations + from_seed.iterations,
        from_input.converged and from_seed.converged,
    )
