"""Event and reading data objects with XML rendering."""

from __future__ import annotations

import base64
import math
import re
import struct
import time
import uuid
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any

API_VERSION = "v3"
CONTENT_TYPE_XML = "application/xml"

VALUE_TYPE_BOOL = "Bool"
VALUE_TYPE_STRING = "String"
VALUE_TYPE_UINT8 = "Uint8"
VALUE_TYPE_UINT16 = "Uint16"
VALUE_TYPE_UINT32 = "Uint32"
VALUE_TYPE_UINT64 = "Uint64"
VALUE_TYPE_INT8 = "Int8"
VALUE_TYPE_INT16 = "Int16"
VALUE_TYPE_INT32 = "Int32"
VALUE_TYPE_INT64 = "Int64"
VALUE_TYPE_FLOAT32 = "Float32"
VALUE_TYPE_FLOAT64 = "Float64"
VALUE_TYPE_BINARY = "Binary"

_INT_RANGES = {
    VALUE_TYPE_UINT8: (0, 2**8 - 1),
    VALUE_TYPE_UINT16: (0, 2**16 - 1),
    VALUE_TYPE_UINT32: (0, 2**32 - 1),
    VALUE_TYPE_UINT64: (0, 2**64 - 1),
    VALUE_TYPE_INT8: (-(2**7), 2**7 - 1),
    VALUE_TYPE_INT16: (-(2**15), 2**15 - 1),
    VALUE_TYPE_INT32: (-(2**31), 2**31 - 1),
    VALUE_TYPE_INT64: (-(2**63), 2**63 - 1),
}

_XML_NAME = re.compile(r"^[A-Za-z_][\w.\-]*$")


@dataclass
class Reading:
    """A single sensor reading belonging to an event."""

    id: str = ""
    origin: int = 0
    device_name: str = ""
    resource_name: str = ""
    profile_name: str = ""
    value_type: str = ""
    units: str = ""
    value: str = ""
    binary_value: bytes = b""
    media_type: str = ""
    tags: dict[str, Any] = field(default_factory=dict)


@dataclass
class Event:
    """A collection of readings reported by one device source."""

    id: str = ""
    device_name: str = ""
    profile_name: str = ""
    source_name: str = ""
    origin: int = 0
    readings: list[Reading] = field(default_factory=list)
    tags: dict[str, Any] = field(default_factory=dict)
    api_version: str = API_VERSION

    def add_simple_reading(self, resource_name: str, value_type: str, value: Any) -> Reading:
        """Append a reading of a scalar value, checked against ``value_type``."""
        reading = Reading(
            id=str(uuid.uuid4()),
            origin=time.time_ns(),
            device_name=self.device_name,
            resource_name=resource_name,
            profile_name=self.profile_name,
            value_type=value_type,
            value=_format_value(value_type, value),
        )
        self.readings.append(reading)
        return reading

    def to_xml(self) -> str:
        """Render the event as an XML document string."""
        root = ET.Element("Event")
        _text(root, "ApiVersion", self.api_version)
        _text(root, "Id", self.id)
        _text(root, "DeviceName", self.device_name)
        _text(root, "ProfileName", self.profile_name)
        _text(root, "SourceName", self.source_name)
        _text(root, "Origin", str(self.origin))
        readings = ET.SubElement(root, "Readings")
        for reading in self.readings:
            readings.append(_reading_element(reading))
        if self.tags:
            root.append(_tags_element(self.tags))
        return ET.tostring(root, encoding="unicode")


def new_event(profile_name: str, device_name: str, source_name: str) -> Event:
    """Create an empty event with a fresh id and the current origin time."""
    return Event(
        id=str(uuid.uuid4()),
        device_name=device_name,
        profile_name=profile_name,
        source_name=source_name,
        origin=time.time_ns(),
    )


def _text(parent: ET.Element, tag: str, text: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = text
    return element


def _tags_element(tags: dict[str, Any]) -> ET.Element:
    element = ET.Element("Tags")
    for key, value in tags.items():
        if not isinstance(key, str) or not _XML_NAME.match(key):
            raise ValueError(f"tag name {key!r} is not a valid XML element name")
        _text(element, key, str(value))
    return element


def _reading_element(reading: Reading) -> ET.Element:
    element = ET.Element("Reading")
    _text(element, "Id", reading.id)
    _text(element, "Origin", str(reading.origin))
    _text(element, "DeviceName", reading.device_name)
    _text(element, "ResourceName", reading.resource_name)
    _text(element, "ProfileName", reading.profile_name)
    _text(element, "ValueType", reading.value_type)
    if reading.units:
        _text(element, "Units", reading.units)
    if reading.tags:
        element.append(_tags_element(reading.tags))
    if reading.value_type == VALUE_TYPE_BINARY:
        _text(element, "BinaryValue", base64.b64encode(reading.binary_value).decode("ascii"))
        _text(element, "MediaType", reading.media_type)
    else:
        _text(element, "Value", reading.value)
    return element


def _format_value(value_type: str, value: Any) -> str:
    if value_type == VALUE_TYPE_BOOL:
        if not isinstance(value, bool):
            raise ValueError(f"value {value!r} is not of type {value_type}")
        return "true" if value else "false"
    if value_type == VALUE_TYPE_STRING:
        if not isinstance(value, str):
            raise ValueError(f"value {value!r} is not of type {value_type}")
        return value
    if value_type in _INT_RANGES:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"value {value!r} is not of type {value_type}")
        low, high = _INT_RANGES[value_type]
        if not low <= value <= high:
            raise ValueError(f"value {value} is out of range for {value_type}")
        return str(value)
    if value_type in (VALUE_TYPE_FLOAT32, VALUE_TYPE_FLOAT64):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"value {value!r} is not of type {value_type}")
        return _format_float(float(value), single=value_type == VALUE_TYPE_FLOAT32)
    if value_type == VALUE_TYPE_BINARY:
        raise ValueError("binary values cannot be added as simple readings")
    raise ValueError(f"unsupported value type {value_type!r}")


def _to_single(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as err:
        raise ValueError(f"value {value} is out of range for {VALUE_TYPE_FLOAT32}") from err


def _format_float(value: float, single: bool) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    target = _to_single(value) if single else value
    for digits in range(18):
        text = f"{target:.{digits}e}"
        parsed = float(text)
        if (_to_single(parsed) if single else parsed) == target:
            return text
    return f"{target:.17e}"