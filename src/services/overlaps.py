"""
Project grouping, per-project overlap sweep and pair aggregation.

Records are bucketed per project, each bucket is swept in start-date order
against a set of still-open intervals, and the resulting overlaps are merged
into one entry per unordered employee pair.
"""

from collections.abc import Iterable, Iterator
from datetime import date
from operator import attrgetter

from models.assignments import (
    AssignmentRecord,
    EmployeeId,
    OverlapContribution,
    PairResult,
    ProjectOverlap,
)

PairKey = tuple[EmployeeId, EmployeeId]


# =============================================================================
# GROUPING
# =============================================================================


class ProjectGrouper:
    """
    Buckets assignment records by project id.

    Backed by a dict, which keeps insertion order: projects iterate in the
    order they were first seen and records keep their arrival order.
    """

    def __init__(self):
        self._buckets: dict[str, list[AssignmentRecord]] = {}

    def add(self, record: AssignmentRecord) -> None:
        self._buckets.setdefault(record.project, []).append(record)

    def items(self) -> Iterator[tuple[str, list[AssignmentRecord]]]:
        return iter(self._buckets.items())

    def __len__(self) -> int:
        """Number of distinct projects."""
        return len(self._buckets)


# =============================================================================
# SWEEP
# =============================================================================


def overlap_days(from_a: date, to_a: date, from_b: date, to_b: date) -> int:
    """Inclusive number of calendar days shared by [from_a, to_a] and [from_b, to_b]."""
    start = max(from_a, from_b)
    end = min(to_a, to_b)
    return max(0, (end - start).days + 1)


def sweep_project(project: str, records: Iterable[AssignmentRecord]) -> list[OverlapContribution]:
    """
    Find every overlapping pair of intervals within one project.

    The active set holds at most one interval per employee: a later record
    for the same employee replaces the earlier one, so new arrivals are only
    compared against that employee's most recent interval.
    """
    ordered = sorted(records, key=attrgetter("date_from"))
    active: dict[EmployeeId, AssignmentRecord] = {}
    contributions = []

    for current in ordered:
        # Sorted by start date, so anything ended before current can never overlap again
        expired = [emp for emp, other in active.items() if other.date_to < current.date_from]
        for emp in expired:
            del active[emp]

        for other in active.values():
            days = overlap_days(current.date_from, current.date_to, other.date_from, other.date_to)
            if days > 0:
                contributions.append(
                    OverlapContribution(
                        employee_a=current.employee_id,
                        employee_b=other.employee_id,
                        days=days,
                        project=project,
                    )
                )

        active[current.employee_id] = current

    return contributions


# =============================================================================
# AGGREGATION
# =============================================================================


def _id_order(employee_id: EmployeeId) -> tuple[bool, int]:
    # The None sentinel sorts before every numeric id
    return (employee_id is not None, employee_id if employee_id is not None else 0)


def pair_key(employee_a: EmployeeId, employee_b: EmployeeId) -> PairKey:
    """Canonical unordered pair: smaller id first."""
    if _id_order(employee_a) <= _id_order(employee_b):
        return (employee_a, employee_b)
    return (employee_b, employee_a)


class PairAggregator:
    """
    Merges overlap contributions into one PairResult per canonical pair.

    Pairs and their project breakdowns keep first-contribution order, which
    is what ranks equal totals in ranked().
    """

    def __init__(self):
        self._pairs: dict[PairKey, PairResult] = {}
        self._project_days: dict[PairKey, dict[str, ProjectOverlap]] = {}

    def add(self, contribution: OverlapContribution) -> None:
        key = pair_key(contribution.employee_a, contribution.employee_b)
        pair = self._pairs.get(key)
        if pair is None:
            pair = PairResult(emp_a=key[0], emp_b=key[1])
            self._pairs[key] = pair
            self._project_days[key] = {}

        by_project = self._project_days[key]
        overlap = by_project.get(contribution.project)
        if overlap is None:
            overlap = ProjectOverlap(project=contribution.project, days=0)
            by_project[contribution.project] = overlap
            pair.projects.append(overlap)

        overlap.days += contribution.days
        pair.total_days += contribution.days

    def ranked(self) -> list[PairResult]:
        """Pairs by total days, descending. Ties keep insertion order."""
        return sorted(self._pairs.values(), key=attrgetter("total_days"), reverse=True)


def aggregate_pairs(contributions: Iterable[OverlapContribution]) -> list[PairResult]:
    aggregator = PairAggregator()
    for contribution in contributions:
        aggregator.add(contribution)
    return aggregator.ranked()
