"""Human-readable renderings of optimization results."""

from __future__ import annotations

from ..routing.models import OptimizationResult

# Improvements below this percentage are not worth reporting.
NEGLIGIBLE_IMPROVEMENT_PERCENT = 1.0


def format_duration(minutes: float) -> str:
    hours, remainder = divmod(round(minutes), 60)
    if hours:
        return f"{hours}h {remainder}m"
    return f"{remainder}m"


def format_optimization_summary(result: OptimizationResult) -> str:
    improvements = result.improvements
    if improvements.percentage_improvement < NEGLIGIBLE_IMPROVEMENT_PERCENT:
        return "Route is already well optimized"

    parts = [f"{improvements.distance_saved_km:.1f} km shorter"]
    if improvements.time_saved_minutes > 0:
        parts.append(f"{format_duration(improvements.time_saved_minutes)} faster")
    if improvements.cost_saved:
        parts.append(f"€{improvements.cost_saved:.0f} cheaper")
    return f"Optimized route: {', '.join(parts)} ({improvements.percentage_improvement:.1f}% improvement)"
