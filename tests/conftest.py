import pytest


@pytest.fixture
def anyio_backend():
    # The runtime schedules fetches with asyncio tasks
    return "asyncio"


@pytest.fixture
def flight_plan_payload():
    """A trimmed SimBrief fetcher response with every consumed field."""

    return {
        "fetch": {"userid": "123456", "status": "Success"},
        "origin": {
            "icao_code": "KJFK",
            "iata_code": "JFK",
            "name": "NEW YORK/KENNEDY INTL",
            "plan_rwy": "31L",
            "trans_alt": "18000",
            "trans_level": "18000",
        },
        "destination": {
            "icao_code": "EGLL",
            "iata_code": "LHR",
            "name": "LONDON/HEATHROW",
            "plan_rwy": "27R",
            "trans_alt": "6000",
            "trans_level": "7000",
        },
        "general": {
            "icao_airline": "BAW",
            "flight_number": "178",
            "costindex": "45",
            "route_distance": "3010",
            "air_distance": "2862",
            "stepclimb_string": "KJFK/0330 NATW/0370",
            "initial_altitude": "33000",
            "route_ifps": "N0487F330 GREKI DCT JUDDS",
            "route_navigraph": "GREKI DCT JUDDS DCT MARTN",
            "sid_ident": "KENNEDY5",
            "sid_trans": "GREKI",
            "star_ident": "BNN1A",
            "star_trans": "BNN",
        },
        "fuel": {
            "taxi": "700",
            "enroute_burn": "52340",
            "contingency": "1570",
            "alternate_burn": "2300",
            "reserve": "2900",
            "etops": "0",
            "extra": "0",
            "extra_required": "0",
            "extra_optional": "0",
            "min_takeoff": "59110",
            "plan_takeoff": "59110",
            "plan_ramp": "59810",
            "plan_landing": "6770",
            "avg_fuel_flow": "7240",
            "max_tanks": "99540",
        },
    }
