import json
from datetime import datetime, timezone

from edgex_north.event import (asset_names, build_envelope, build_envelopes,
                               origin_timestamp)
from edgex_north.reading import Datapoint, Reading

T = datetime(2020, 1, 1, 0, 0, 0, 123456, tzinfo=timezone.utc)


def make_reading(asset, reading_id, points, timestamp=T):
    return Reading(asset, reading_id, timestamp, [Datapoint(name, value) for name, value in points])


def test_asset_names_sorted_and_distinct():
    readings = [make_reading(name, i, [("x", i)]) for i, name in enumerate(["b", "a", "c", "a", "b"])]

    assert asset_names(readings) == ["a", "b", "c"]
    assert asset_names([]) == []


def test_origin_timestamp_adds_raw_microseconds():
    assert origin_timestamp(T) == 1577836800 * 1000 + 123456
    assert origin_timestamp(datetime(2020, 1, 1)) == 1577836800000


def test_two_assets_scenario():
    readings = [
        make_reading("A", 1, [("temp", "21.5")]),
        make_reading("B", 2, [("hum", "55")]),
    ]

    envelopes = build_envelopes(readings)

    assert [e.device for e in envelopes] == ["A", "B"]
    assert envelopes[0].id == "1"
    assert [(r.id, r.name, r.value) for r in envelopes[0].readings] == [("temp1", "temp", "21.5")]
    assert [(r.id, r.name, r.value) for r in envelopes[1].readings] == [("hum2", "hum", "55")]
    assert envelopes[1].readings[0].origin == str(1577836800 * 1000 + 123456)


def test_entries_keep_input_order():
    readings = [
        make_reading("pump", 5, [("flow", 1.5), ("pressure", 2)]),
        make_reading("fan", 6, [("rpm", 900)]),
        make_reading("pump", 7, [("flow", 1.75)]),
    ]

    envelope = build_envelope("pump", readings)

    assert envelope.device == "pump"
    assert envelope.id == "5"
    assert [r.id for r in envelope.readings] == ["flow5", "pressure5", "flow7"]
    assert [r.value for r in envelope.readings] == ["1.5", "2", "1.75"]


def test_assets_without_datapoints_are_skipped():
    readings = [
        make_reading("empty", 1, []),
        make_reading("full", 2, [("v", 1)]),
    ]

    assert build_envelope("empty", readings) is None
    assert build_envelope("missing", readings) is None
    assert [e.device for e in build_envelopes(readings)] == ["full"]


def test_grouping_is_idempotent():
    readings = [
        make_reading("b", 1, [("x", 1)]),
        make_reading("a", 2, [("y", "two")]),
        make_reading("b", 3, [("z", [3])]),
    ]

    first = [e.to_json() for e in build_envelopes(readings)]
    second = [e.to_json() for e in build_envelopes(readings)]

    assert first == second


def test_wire_layout():
    envelope = build_envelopes([make_reading("A", 1, [("temp", 21.5)])])[0]

    body = json.loads(envelope.to_json())

    assert list(body.keys()) == ["created", "device", "id", "modified", "origin", "pushed", "readings"]
    assert list(body["readings"][0].keys()) == ["id", "origin", "pushed", "name", "value"]
    assert body == {
        "created": "0",
        "device": "A",
        "id": "1",
        "modified": "0",
        "origin": "0",
        "pushed": "0",
        "readings": [
            {"id": "temp1", "origin": "1577836923456", "pushed": "0", "name": "temp", "value": "21.5"},
        ],
    }
