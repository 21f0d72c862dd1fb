import base64
import xml.etree.ElementTree as ET

import pytest

from edgeappsvc.events import (
    API_VERSION,
    VALUE_TYPE_BINARY,
    VALUE_TYPE_BOOL,
    VALUE_TYPE_FLOAT64,
    VALUE_TYPE_INT32,
    VALUE_TYPE_STRING,
    VALUE_TYPE_UINT8,
    Event,
    Reading,
    new_event,
)


def create_test_event() -> Event:
    event = new_event("MyProfile", "MyDevice", "MySource")
    event.add_simple_reading("MyResource", VALUE_TYPE_INT32, 1234)
    event.tags = {"WhereAmI": "NotKansas"}
    return event


def test_new_event_sets_names_and_identity():
    event = new_event("MyProfile", "MyDevice", "MySource")
    assert event.profile_name == "MyProfile"
    assert event.device_name == "MyDevice"
    assert event.source_name == "MySource"
    assert event.api_version == API_VERSION
    assert event.readings == []
    assert event.origin > 0
    assert len(event.id) == 36


def test_new_events_have_distinct_ids():
    first = new_event("MyProfile", "MyDevice", "MySource")
    second = new_event("MyProfile", "MyDevice", "MySource")
    assert first.id != second.id
    assert first != second


def test_add_simple_reading_int32():
    event = create_test_event()
    assert len(event.readings) == 1
    reading = event.readings[0]
    assert reading.value == "1234"
    assert reading.value_type == VALUE_TYPE_INT32
    assert reading.resource_name == "MyResource"
    assert reading.device_name == "MyDevice"
    assert reading.profile_name == "MyProfile"


def test_add_simple_reading_bool_and_string():
    event = new_event("MyProfile", "MyDevice", "MySource")
    event.add_simple_reading("Flag", VALUE_TYPE_BOOL, True)
    event.add_simple_reading("Name", VALUE_TYPE_STRING, "NotKansas")
    assert [r.value for r in event.readings] == ["true", "NotKansas"]


def test_add_simple_reading_float64_uses_exponent_form():
    event = new_event("MyProfile", "MyDevice", "MySource")
    reading = event.add_simple_reading("Temp", VALUE_TYPE_FLOAT64, 1234.0)
    assert reading.value == "1.234e+03"
    assert float(reading.value) == 1234.0


@pytest.mark.parametrize(
    "value_type, value",
    [
        (VALUE_TYPE_INT32, 2**31),
        (VALUE_TYPE_UINT8, -1),
        (VALUE_TYPE_INT32, "1234"),
        (VALUE_TYPE_BOOL, 1),
        (VALUE_TYPE_STRING, 5),
        (VALUE_TYPE_BINARY, b"abc"),
        ("Nonsense", 1),
    ],
)
def test_add_simple_reading_rejects_bad_values(value_type, value):
    event = new_event("MyProfile", "MyDevice", "MySource")
    with pytest.raises(ValueError):
        event.add_simple_reading("MyResource", value_type, value)
    assert event.readings == []


def test_to_xml_round_trips_fields():
    event = create_test_event()
    root = ET.fromstring(event.to_xml())
    assert root.tag == "Event"
    assert root.findtext("Id") == event.id
    assert root.findtext("DeviceName") == "MyDevice"
    assert root.findtext("ProfileName") == "MyProfile"
    assert root.findtext("SourceName") == "MySource"
    assert root.findtext("Origin") == str(event.origin)
    assert root.findtext("Tags/WhereAmI") == "NotKansas"
    readings = root.findall("Readings/Reading")
    assert len(readings) == 1
    assert readings[0].findtext("Value") == "1234"
    assert readings[0].findtext("ValueType") == VALUE_TYPE_INT32


def test_to_xml_is_deterministic():
    event = create_test_event()
    first = event.to_xml()
    second = event.to_xml()
    assert first == second
    assert event.id in first
    assert ET.fromstring(first).findtext("Id") == event.id


def test_to_xml_binary_reading_is_base64():
    event = new_event("MyProfile", "MyDevice", "MySource")
    event.readings.append(
        Reading(value_type=VALUE_TYPE_BINARY, binary_value=b"\x00\x01", media_type="image/png")
    )
    reading = ET.fromstring(event.to_xml()).find("Readings/Reading")
    assert base64.b64decode(reading.findtext("BinaryValue")) == b"\x00\x01"
    assert reading.findtext("MediaType") == "image/png"
    assert reading.find("Value") is None


def test_to_xml_rejects_invalid_tag_name():
    event = create_test_event()
    event.tags = {"not a name": "x"}
    with pytest.raises(ValueError):
        event.to_xml()