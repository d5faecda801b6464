import itertools

import pytest

_ids = itertools.count(1)


def make_session(unit_code, activity, day, time, **extra):
    sess = {
        "id": f"{unit_code}-{activity}-{next(_ids)}",
        "unitCode": unit_code,
        "unitName": f"{unit_code} Unit",
        "classType": activity.title(),
        "activity": activity,
        "day": day,
        "time": time,
        "room": "GP Z411",
        "teachingStaff": "Staff",
    }
    sess.update(extra)
    return sess


def make_catalog(*sessions):
    catalog = {}
    for sess in sessions:
        entry = catalog.setdefault(sess["unitCode"], {"unitName": sess["unitName"], "sessions": []})
        entry["sessions"].append(sess)
    return catalog


@pytest.fixture
def session():
    return make_session


@pytest.fixture
def catalog():
    return make_catalog
