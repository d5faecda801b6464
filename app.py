# app.py
# Provides a minimal Flask-based REST API over the unit catalog and the timetable builder.

from flask import Flask, request, jsonify
import json

from config import UNITS_FILE, WEEKDAYS
from exceptions import (
    CUSTOM_ERRORS,
    CatalogReadingError,
    InvalidCatalogError,
    UnitNotFoundError,
    UnknownDayError,
)
from logger import logger
from schedule_finder import (
    INFEASIBLE,
    build_timetable,
    find_unresolvable_pairs,
    find_unresolvable_units,
    units_from_catalog,
)
from time_range import parse_time_range

app = Flask(__name__)

ALL_UNITS = {}  # Global cache for the unit catalog, loaded at startup.

SESSION_FIELDS = ("id", "unitCode", "unitName", "classType", "activity", "day", "time", "room", "teachingStaff")


@app.get("/api/units")
def api_units():
    # Returns the complete unit catalog.
    return jsonify(ALL_UNITS)


@app.post("/api/timetable")
def api_timetable():
    # Builds one conflict-free timetable from a JSON payload of chosen unit codes.
    body = request.get_json(silent=True)
    codes = body.get("unitCodes", []) if isinstance(body, dict) else []
    if not (isinstance(codes, list) and codes and all(isinstance(c, str) for c in codes)):
        return jsonify({"error": "unitCodes must be a non-empty list of unit codes"}), 400

    missing = [code for code in codes if code not in ALL_UNITS]
    if missing:
        raise UnitNotFoundError(f"Unknown unit code(s): {', '.join(map(str, missing))}")

    chosen = {code: ALL_UNITS[code] for code in dict.fromkeys(codes)}
    timetable = build_timetable(chosen)
    if timetable is not INFEASIBLE:
        return jsonify({"timetable": timetable})

    # Nothing fits; tell the caller which units clash on their own and which can never sit together.
    units = units_from_catalog(chosen)
    return jsonify({
        "error": "No conflict-free timetable found",
        "unresolvableUnits": find_unresolvable_units(units),
        "unresolvablePairs": find_unresolvable_pairs(units),
    })


def _handle_custom_error(exc):
    status = CUSTOM_ERRORS[type(exc)]
    logger.warning("%s: %s", type(exc).__name__, exc)
    return jsonify({"error": str(exc)}), status


for _exc_type in CUSTOM_ERRORS:
    app.register_error_handler(_exc_type, _handle_custom_error)


def validate_units(units):
    # Checks every session of a catalog: required fields, weekday tag and a parseable time range.
    for code, unit in units.items():
        if not isinstance(unit, dict) or "unitName" not in unit or not isinstance(unit.get("sessions"), list):
            raise InvalidCatalogError(f"{code}: unit needs unitName and a sessions list")
        for s in unit["sessions"]:
            absent = [f for f in SESSION_FIELDS if f not in s]
            if absent:
                raise InvalidCatalogError(f"{code}: session {s.get('id')!r} is missing {', '.join(absent)}")
            if s["unitCode"] != code:
                raise InvalidCatalogError(f"{code}: session {s['id']!r} belongs to {s['unitCode']}")
            if s["day"] not in WEEKDAYS:
                raise UnknownDayError(s["day"])
            parse_time_range(s["time"])
    return units


def load_units(path=UNITS_FILE):
    # Loads and validates the unit catalog from a JSON file.
    try:
        with open(path, encoding="utf-8") as f:
            units = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogReadingError(f"Cannot read unit catalog {path}: {exc}") from exc

    if not isinstance(units, dict):
        raise InvalidCatalogError("Unit catalog must map unit codes to units")
    validate_units(units)
    logger.info("Loaded %d unit(s) from %s", len(units), path)
    return units


if __name__ == "__main__":
    # Load the catalog into memory and start the development server.
    ALL_UNITS.update(load_units())
    app.run(debug=True)
