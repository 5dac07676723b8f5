import copy

import pytest


_NEO_RECORD = {
    "id": "3542519",
    "name": "(2010 PK9)",
    "nasa_jpl_url": "https://ssd.jpl.nasa.gov/tools/sbdb_lookup.html#/?sstr=3542519",
    "absolute_magnitude_h": 21.2,
    "estimated_diameter": {
        "kilometers": {"estimated_diameter_min": 0.1, "estimated_diameter_max": 0.3},
    },
    "is_potentially_hazardous_asteroid": True,
    "close_approach_data": [
        {
            "close_approach_date_full": "2026-Oct-20 03:14",
            "relative_velocity": {
                "kilometers_per_second": "18.5",
                "kilometers_per_hour": "66600.0",
            },
            "miss_distance": {
                "astronomical": "0.0301",
                "lunar": "11.71",
                "kilometers": "4502901.2",
            },
            "orbiting_body": "Earth",
        }
    ],
    "orbital_data": {
        "eccentricity": ".6841",
        "semi_major_axis": "1.5948",
        "inclination": "13.5",
        "orbital_period": "735.6",
    },
}


def make_neo(**overrides):
    rec = copy.deepcopy(_NEO_RECORD)
    rec.update(overrides)
    return rec


@pytest.fixture
def neo_record():
    return make_neo()


@pytest.fixture
def neo_feed():
    near = make_neo()
    far_safe = make_neo(id="2000433", name="433 Eros", absolute_magnitude_h=10.4,
                        is_potentially_hazardous_asteroid=False)
    far_safe["close_approach_data"][0]["miss_distance"]["kilometers"] = "9000000.0"
    closest_safe = make_neo(id="54016", name="(2020 AB)", absolute_magnitude_h=18.0,
                            is_potentially_hazardous_asteroid=False)
    closest_safe["close_approach_data"][0]["miss_distance"]["kilometers"] = "120000.0"
    return {
        "element_count": 3,
        "near_earth_objects": {
            "2026-10-20": [near, far_safe],
            "2026-10-21": [closest_safe],
        },
    }
