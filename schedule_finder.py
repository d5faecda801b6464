# schedule_finder.py
# Picks one session per activity for every unit with a backtracking DFS, so that no two picked sessions overlap.

from datetime import datetime
from itertools import combinations
from math import prod
from typing import Any, Dict, List, NamedTuple, Tuple, Union

from config import WEEKDAYS
from exceptions import DuplicateUnitError, UnknownDayError
from logger import logger
from time_range import has_time_conflict, parse_time_range, intervals_conflict

__all__ = [
    "INFEASIBLE",
    "Infeasible",
    "CommittedInterval",
    "group_activities",
    "units_from_catalog",
    "option_count",
    "order_units",
    "order_activities",
    "schedule",
    "build_timetable",
    "sessions_conflict",
    "find_conflicts",
    "find_unresolvable_units",
    "find_unresolvable_pairs",
]

Session = Dict[str, Any]
Activity = Dict[str, Any]
Unit = Dict[str, Any]
Schedule = Dict[str, Dict[str, Any]]


class Infeasible:
    # Result marker for "no conflict-free timetable exists"; never equal to a schedule, even an empty one.
    __slots__ = ()

    def __repr__(self) -> str:
        return "INFEASIBLE"


INFEASIBLE = Infeasible()


class CommittedInterval(NamedTuple):
    start: datetime
    end: datetime
    unit_code: str
    activity: str


def group_activities(sessions: List[Session]) -> List[Activity]:
    # Group a unit's sessions by activity tag, keeping first-appearance order.
    groups: Dict[str, List[Session]] = {}
    for sess in sessions:
        groups.setdefault(sess["activity"], []).append(sess)
    return [{"activityType": tag, "sessions": opts} for tag, opts in groups.items()]


def units_from_catalog(catalog: Dict[str, Dict[str, Any]]) -> List[Unit]:
    # Turn {unitCode: {unitName, sessions}} into the search form, one entry per unit.
    return [
        {
            "unitCode": code,
            "unitName": data["unitName"],
            "activities": group_activities(data["sessions"]),
        }
        for code, data in catalog.items()
    ]


def option_count(unit: Unit) -> int:
    return prod(len(act["sessions"]) for act in unit["activities"])


def order_units(units: List[Unit]) -> List[Unit]:
    # Units with the most combinations go first. sorted() is stable, so ties keep input order.
    return sorted(units, key=option_count, reverse=True)


def order_activities(activities: List[Activity]) -> List[Activity]:
    # Most-constrained activity first.
    return sorted(activities, key=lambda act: len(act["sessions"]))


def _search(units: List[Unit]) -> Union[Schedule, Infeasible]:
    # The DFS itself, without logging, so diagnostics can call it many times quietly.
    seen = set()
    for unit in units:
        if unit["unitCode"] in seen:
            raise DuplicateUnitError(unit["unitCode"])
        seen.add(unit["unitCode"])

    ordered = order_units(units)

    # Both structures belong to this call only and are unwound in place on backtrack.
    occupied: Dict[str, List[CommittedInterval]] = {day: [] for day in WEEKDAYS}
    partial: Schedule = {}

    def schedule_unit(u: int) -> bool:
        if u == len(ordered):
            return True  # Every unit is committed.

        unit = ordered[u]
        partial[unit["unitCode"]] = {"unitName": unit["unitName"], "sessions": []}
        return schedule_activity(u, order_activities(unit["activities"]), 0)

    def schedule_activity(u: int, activities: List[Activity], a: int) -> bool:
        if a == len(activities):
            return schedule_unit(u + 1)  # This unit is done, move to the next one.

        unit_code = ordered[u]["unitCode"]
        picked = partial[unit_code]["sessions"]
        for sess in activities[a]["sessions"]:
            start, end = parse_time_range(sess["time"])

            day = sess["day"]
            if day not in occupied:
                raise UnknownDayError(day)
            taken = occupied[day]

            # Prune this candidate if it overlaps anything already placed on that day.
            if has_time_conflict(taken, start, end):
                continue

            picked.append(sess)
            taken.append(CommittedInterval(start, end, unit_code, sess["activity"]))

            if schedule_activity(u, activities, a + 1):
                return True

            # Backtrack: exact inverse of the commit above.
            picked.pop()
            taken.pop()

        return False

    return partial if schedule_unit(0) else INFEASIBLE


def schedule(units: List[Unit]) -> Union[Schedule, Infeasible]:
    # Return {unitCode: {unitName, sessions}} with one session per activity, or INFEASIBLE.
    # InvalidTimeFormat, UnknownDayError and DuplicateUnitError propagate: they mean bad data, not a dead end.
    logger.debug(
        "Searching %d unit(s) with %d activity group(s)",
        len(units), sum(len(u["activities"]) for u in units),
    )

    result = _search(units)
    if result is INFEASIBLE:
        logger.warning("Unable to find a conflict-free timetable for %s",
                       ", ".join(u["unitCode"] for u in units) or "no units")
    else:
        logger.info("Built a conflict-free timetable for %d unit(s)", len(result))
    return result


def build_timetable(catalog: Dict[str, Dict[str, Any]]) -> Union[Schedule, Infeasible]:
    return schedule(units_from_catalog(catalog))


def sessions_conflict(a: Session, b: Session) -> bool:
    # Two sessions clash when they share a day and their time ranges overlap.
    if a["day"] != b["day"]:
        return False
    return intervals_conflict(*parse_time_range(a["time"]), *parse_time_range(b["time"]))


def find_conflicts(timetable: Schedule) -> List[Tuple[Session, Session]]:
    # Every clashing pair in a finished timetable; empty for a sound one.
    picked = [sess for entry in timetable.values() for sess in entry["sessions"]]
    return [(a, b) for a, b in combinations(picked, 2) if sessions_conflict(a, b)]


def find_unresolvable_units(units: List[Unit]) -> List[str]:
    # Units whose own activities already clash, whatever else is chosen.
    return [u["unitCode"] for u in units if _search([u]) is INFEASIBLE]


def find_unresolvable_pairs(units: List[Unit]) -> List[List[str]]:
    # Pairs of units that each fit alone but never together.
    fits_alone = [u for u in units if _search([u]) is not INFEASIBLE]
    return [
        [a["unitCode"], b["unitCode"]]
        for a, b in combinations(fits_alone, 2)
        if _search([a, b]) is INFEASIBLE
    ]
