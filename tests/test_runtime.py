import json

import anyio
import httpx
import pytest

from flypad.ingestors import FlightPlanIngestor, WeatherIngestor
from flypad.models import WeatherRecord
from flypad.models.events import (
    FlightPlanRequested,
    IdentifierEdited,
    Slot,
    UserIdLoadRequested,
    UserIdSaveRequested,
    UserIdSet,
    WeatherRefreshRequested,
)
from flypad.services import FlypadRuntime, StateReducer, UserIdStore

KJFK_BODY = [
    {
        "temp": 15.0,
        "wdir": 90,
        "wspd": 10,
        "visib": "10",
        "altim": 29.92,
        "rawOb": "KJFK 151751Z 09010KT 10SM",
    }
]


def _weather_handler(bodies: dict[str, list]):
    def handler(request: httpx.Request):
        station = request.url.params["ids"]
        if station not in bodies:
            return httpx.Response(500, text="unavailable")
        return httpx.Response(200, json=bodies[station])

    return handler


def _runtime(tmp_path, weather_handler, plan_handler=None) -> FlypadRuntime:
    plan_handler = plan_handler or (lambda request: httpx.Response(500))
    return FlypadRuntime(
        reducer=StateReducer(include_forecast=True, default_user_id=""),
        weather_ingestor=WeatherIngestor(
            base_url="https://weather.test/metar",
            transport=httpx.MockTransport(weather_handler),
        ),
        flight_plan_ingestor=FlightPlanIngestor(
            base_url="https://planner.test/xml.fetcher.php",
            transport=httpx.MockTransport(plan_handler),
        ),
        user_store=UserIdStore(tmp_path / "user.json"),
    )


@pytest.mark.anyio
async def test_refresh_delivers_each_slot_independently(tmp_path):
    handler = _weather_handler(
        {
            "KJFK": KJFK_BODY,
            "XXXX": [],
        }
    )
    runtime = _runtime(tmp_path, handler)
    runtime.dispatch(IdentifierEdited(slot=Slot.DEPARTURE, identifier="KJFK"))
    runtime.dispatch(IdentifierEdited(slot=Slot.ARRIVAL, identifier="XXXX"))
    runtime.dispatch(WeatherRefreshRequested())

    with anyio.fail_after(5):
        await runtime.run_until_idle()

    state = runtime.snapshot()
    assert state.departure.weather.temperature == 15.0
    assert state.departure.weather.dew_point == 0
    assert state.departure.weather.wind_direction == 90
    assert state.departure.weather.visibility == "10"
    assert state.departure.metar_text == "KJFK 151751Z 09010KT 10SM"
    assert state.arrival.weather == WeatherRecord()
    assert state.arrival.metar_text == ""


@pytest.mark.anyio
async def test_unknown_station_keeps_prior_record(tmp_path):
    bodies = {"KJFK": KJFK_BODY}
    runtime = _runtime(tmp_path, _weather_handler(bodies))
    runtime.dispatch(IdentifierEdited(slot=Slot.DEPARTURE, identifier="KJFK"))
    runtime.dispatch(IdentifierEdited(slot=Slot.ARRIVAL, identifier="KJFK"))
    runtime.dispatch(WeatherRefreshRequested())
    with anyio.fail_after(5):
        await runtime.run_until_idle()
    prior = runtime.snapshot().departure

    bodies["ZZZZ"] = []
    runtime.dispatch(IdentifierEdited(slot=Slot.DEPARTURE, identifier="ZZZZ"))
    runtime.dispatch(WeatherRefreshRequested())
    with anyio.fail_after(5):
        await runtime.run_until_idle()

    departure = runtime.snapshot().departure
    assert departure.icao == "ZZZZ"
    assert departure.weather == prior.weather
    assert departure.metar_text == prior.metar_text


@pytest.mark.anyio
async def test_flight_plan_fetch_populates_identifiers(tmp_path, flight_plan_payload):
    flight_plan_payload["general"]["costindex"] = {}
    requested_users: list[str] = []

    def plan_handler(request: httpx.Request):
        requested_users.append(request.url.params["userid"])
        return httpx.Response(200, content=json.dumps(flight_plan_payload).encode())

    runtime = _runtime(
        tmp_path, _weather_handler({}), plan_handler=plan_handler
    )
    runtime.dispatch(UserIdSet(user_id="123456"))
    runtime.dispatch(FlightPlanRequested())

    with anyio.fail_after(5):
        await runtime.run_until_idle()

    state = runtime.snapshot()
    assert requested_users == ["123456"]
    assert state.flight_plan is not None
    assert state.flight_plan.overview.cost_index == "No Value"
    assert state.flight_plan.overview.flight_number == "178"
    assert state.departure.icao == "KJFK"
    assert state.arrival.icao == "EGLL"
    assert state.route_text == "GREKI DCT JUDDS DCT MARTN"


@pytest.mark.anyio
async def test_failed_flight_plan_leaves_plan_absent(tmp_path):
    runtime = _runtime(tmp_path, _weather_handler({}))
    runtime.dispatch(UserIdSet(user_id="0"))
    runtime.dispatch(FlightPlanRequested())

    with anyio.fail_after(5):
        await runtime.run_until_idle()

    state = runtime.snapshot()
    assert state.flight_plan is None
    assert state.departure.icao == ""
    assert state.route_text == ""


@pytest.mark.anyio
async def test_user_id_round_trips_through_store(tmp_path):
    runtime = _runtime(tmp_path, _weather_handler({}))
    runtime.dispatch(UserIdSet(user_id="791411"))
    runtime.dispatch(UserIdSaveRequested())
    with anyio.fail_after(5):
        await runtime.run_until_idle()

    assert json.loads((tmp_path / "user.json").read_text()) == "791411"

    fresh = _runtime(tmp_path, _weather_handler({}))
    fresh.dispatch(UserIdLoadRequested())
    with anyio.fail_after(5):
        await fresh.run_until_idle()

    assert fresh.snapshot().user_id == "791411"


@pytest.mark.anyio
async def test_missing_store_leaves_user_id_empty(tmp_path):
    runtime = _runtime(tmp_path, _weather_handler({}))
    runtime.dispatch(UserIdLoadRequested())

    with anyio.fail_after(5):
        await runtime.run_until_idle()

    assert runtime.snapshot().user_id == ""


@pytest.mark.anyio
async def test_save_failure_is_not_fatal(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    runtime = FlypadRuntime(
        reducer=StateReducer(include_forecast=True, default_user_id=""),
        user_store=UserIdStore(blocker / "user.json"),
    )
    runtime.dispatch(UserIdSet(user_id="791411"))
    runtime.dispatch(UserIdSaveRequested())

    with anyio.fail_after(5):
        await runtime.run_until_idle()

    assert runtime.snapshot().user_id == "791411"


@pytest.mark.anyio
async def test_run_consumes_events_until_cancelled(tmp_path):
    runtime = _runtime(tmp_path, _weather_handler({}))

    async with anyio.create_task_group() as tg:
        tg.start_soon(runtime.run)
        runtime.dispatch(IdentifierEdited(slot=Slot.ARRIVAL, identifier="EGLL"))
        with anyio.fail_after(5):
            while runtime.snapshot().arrival.icao != "EGLL":
                await anyio.sleep(0.01)
        tg.cancel_scope.cancel()

    assert runtime.snapshot().arrival.icao == "EGLL"


@pytest.mark.anyio
async def test_duplicate_refreshes_all_deliver_in_arrival_order(tmp_path):
    calls: dict[str, int] = {}
    delivered: list[str] = []

    async def handler(request: httpx.Request):
        station = request.url.params["ids"]
        n = calls.get(station, 0)
        calls[station] = n + 1
        if station == "KJFK" and n == 0:
            # first departure response arrives after the second one
            await anyio.sleep(0.05)
        text = f"{station} call{n}"
        delivered.append(text)
        return httpx.Response(200, json=[{"rawOb": text}])

    runtime = _runtime(tmp_path, handler)
    runtime.dispatch(IdentifierEdited(slot=Slot.DEPARTURE, identifier="KJFK"))
    runtime.dispatch(IdentifierEdited(slot=Slot.ARRIVAL, identifier="EGLL"))
    runtime.dispatch(WeatherRefreshRequested())
    runtime.dispatch(WeatherRefreshRequested())

    with anyio.fail_after(5):
        await runtime.run_until_idle()

    state = runtime.snapshot()
    assert calls == {"KJFK": 2, "EGLL": 2}
    assert delivered.index("KJFK call0") > delivered.index("KJFK call1")
    assert state.departure.metar_text == "KJFK call0"
    last_arrival = [text for text in delivered if text.startswith("EGLL")][-1]
    assert state.arrival.metar_text == last_arrival


@pytest.mark.anyio
async def test_unexpected_fetch_failure_still_delivers(tmp_path):
    def handler(request: httpx.Request):
        raise RuntimeError("boom")

    runtime = _runtime(tmp_path, handler)
    runtime.dispatch(IdentifierEdited(slot=Slot.DEPARTURE, identifier="KJFK"))
    runtime.dispatch(WeatherRefreshRequested())

    with anyio.fail_after(5):
        await runtime.run_until_idle()

    state = runtime.snapshot()
    assert not runtime.orchestrator.pending
    assert state.departure.icao == "KJFK"
    assert state.departure.weather == WeatherRecord()
    assert state.departure.metar_text == ""


@pytest.mark.anyio
async def test_unexpected_plan_failure_leaves_plan_absent(tmp_path):
    def plan_handler(request: httpx.Request):
        raise RuntimeError("boom")

    runtime = _runtime(tmp_path, _weather_handler({}), plan_handler=plan_handler)
    runtime.dispatch(UserIdSet(user_id="123456"))
    runtime.dispatch(FlightPlanRequested())

    with anyio.fail_after(5):
        await runtime.run_until_idle()

    assert runtime.snapshot().flight_plan is None
    assert not runtime.orchestrator.pending


@pytest.mark.anyio
async def test_run_keeps_consuming_after_a_failed_event(tmp_path):
    runtime = _runtime(tmp_path, _weather_handler({}))

    async with anyio.create_task_group() as tg:
        tg.start_soon(runtime.run)
        runtime.dispatch(object())
        runtime.dispatch(IdentifierEdited(slot=Slot.DEPARTURE, identifier="LFPG"))
        with anyio.fail_after(5):
            while runtime.snapshot().departure.icao != "LFPG":
                await anyio.sleep(0.01)
        tg.cancel_scope.cancel()

    assert runtime.snapshot().departure.icao == "LFPG"
