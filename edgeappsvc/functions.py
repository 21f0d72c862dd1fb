"""Sample pipeline functions operating on events."""

from __future__ import annotations

import threading
from typing import Any

from edgeappsvc.events import CONTENT_TYPE_XML, VALUE_TYPE_BINARY, Event

EVENTS_CONVERTED_TO_XML_NAME = "EventsConvertedToXML"


class PipelineError(Exception):
    """Failure of a pipeline function, handed back as the function's result."""


class Counter:
    """A thread-safe monotonically increasing metric."""

    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    @property
    def count(self) -> int:
        return self._count

    def inc(self, amount: int = 1) -> None:
        with self._lock:
            self._count += amount


class Sample:
    """Example pipeline functions.

    Each function takes a context and the data from the previous function and
    returns ``(continue_pipeline, result)``; on failure the result is a
    PipelineError. The context provides ``logger``, ``pipeline_id``,
    ``command_client``, ``metrics_manager``, ``set_response_data`` and
    ``set_response_content_type``.
    """

    def __init__(self) -> None:
        self.events_converted_to_xml: Counter | None = None

    def log_event_details(self, ctx: Any, data: Any) -> tuple[bool, Any]:
        """Log the event and its readings, passing the event on unchanged."""
        log = ctx.logger
        pipeline = ctx.pipeline_id
        log.debug("LogEventDetails called in pipeline '%s'", pipeline)

        if data is None:
            return False, PipelineError(
                f"function LogEventDetails in pipeline '{pipeline}': No Data Received"
            )
        if not isinstance(data, Event):
            return False, PipelineError(
                f"function LogEventDetails in pipeline '{pipeline}', type received is not an Event"
            )

        event = data
        log.info(
            "Event received in pipeline '%s': ID=%s, Device=%s, and ReadingCount=%d",
            pipeline, event.id, event.device_name, len(event.readings),
        )
        for number, reading in enumerate(event.readings, start=1):
            if reading.value_type.lower() == VALUE_TYPE_BINARY.lower():
                log.info(
                    "Reading #%d received in pipeline '%s' with ID=%s, Resource=%s, "
                    "ValueType=%s, MediaType=%s and BinaryValue of size=`%d`",
                    number, pipeline, reading.id, reading.resource_name,
                    reading.value_type, reading.media_type, len(reading.binary_value),
                )
            else:
                log.info(
                    "Reading #%d received in pipeline '%s' with ID=%s, Resource=%s, "
                    "ValueType=%s, Value=`%s`",
                    number, pipeline, reading.id, reading.resource_name,
                    reading.value_type, reading.value,
                )
        return True, event

    def send_get_command(self, ctx: Any, data: Any) -> tuple[bool, Any]:
        """Issue the device's first GET command and pass on the returned event."""
        log = ctx.logger
        pipeline = ctx.pipeline_id
        log.debug("SendGetCommand function called in pipeline '%s'", pipeline)

        if data is None:
            return False, PipelineError(
                f"function SendGetCommand in pipeline '{pipeline}': No Data Received"
            )
        if not isinstance(data, Event):
            return False, PipelineError(
                f"function SendGetCommand in pipeline '{pipeline}', type received is not an Event"
            )

        device = data.device_name
        client = ctx.command_client
        log.debug("Issuing Command Query for device %s in pipeline '%s'", device, pipeline)
        try:
            response = client.device_core_commands_by_device_name(device)
        except Exception as err:
            return False, PipelineError(
                f"failed to get list of commands for {device} device: {err} in pipeline '{pipeline}'"
            )

        commands = list(response.core_commands)
        log.debug(
            "Device %s has %d commands to choose from. (in pipeline '%s')",
            device, len(commands), pipeline,
        )
        command_name = next((command.name for command in commands if command.get), "")
        if not command_name:
            return False, PipelineError(
                f"failed to find a GET command for {device} device in pipeline '{pipeline}'"
            )

        log.debug("Issuing Command %s for device %s in pipeline '%s'", command_name, device, pipeline)
        try:
            event_response = client.issue_get_command_by_name(
                device, command_name, push_event=False, return_event=True
            )
        except Exception as err:
            return False, PipelineError(
                f"failed to get Event for commandName {command_name} on {device} device: "
                f"{err} in pipeline '{pipeline}'"
            )

        log.debug(
            "SendGetCommand successfully received new event from GET command %s on %s device in pipeline '%s'",
            command_name, device, pipeline,
        )
        log.debug("Event returned is %r", event_response.event)
        return True, event_response.event

    def convert_event_to_xml(self, ctx: Any, data: Any) -> tuple[bool, Any]:
        """Convert the event to an XML string and count the conversion."""
        log = ctx.logger
        pipeline = ctx.pipeline_id
        log.debug("ConvertEventToXML called in pipeline '%s'", pipeline)

        if data is None:
            return False, PipelineError(
                f"function ConvertEventToXML in pipeline '{pipeline}': No Data Received"
            )
        if not isinstance(data, Event):
            return False, PipelineError(
                f"function ConvertEventToXML in pipeline '{pipeline}': type received is not an Event"
            )

        try:
            xml = data.to_xml()
        except (ValueError, TypeError):
            return False, PipelineError(
                f"function ConvertEventToXML in pipeline '{pipeline}': failed to convert event to XML"
            )

        log.debug("Event converted to XML in pipeline '%s': %s", pipeline, xml)

        if self.events_converted_to_xml is None:
            self.events_converted_to_xml = Counter()
            manager = ctx.metrics_manager
            try:
                if manager is None:
                    raise RuntimeError("metrics manager not available")
                manager.register(EVENTS_CONVERTED_TO_XML_NAME, self.events_converted_to_xml, None)
            except Exception as err:
                log.error(
                    "Unable to register metric %s. Collection will continue, but metric will not be reported: %s",
                    EVENTS_CONVERTED_TO_XML_NAME, err,
                )
        self.events_converted_to_xml.inc(1)
        return True, xml

    def output_xml(self, ctx: Any, data: Any) -> tuple[bool, Any]:
        """Set the XML string as the response data and end the pipeline."""
        log = ctx.logger
        pipeline = ctx.pipeline_id
        log.debug("OutputXML called in pipeline '%s'", pipeline)

        if data is None:
            return False, PipelineError(
                f"function OutputXML in pipeline '{pipeline}': No Data Received"
            )
        if not isinstance(data, str):
            return False, PipelineError(
                f"function ConvertEventToXML in pipeline '{pipeline}': type received is not an string"
            )

        log.debug("Outputting the following XML in pipeline '%s': %s", pipeline, data)
        ctx.set_response_data(data.encode("utf-8"))
        ctx.set_response_content_type(CONTENT_TYPE_XML)
        return False, None