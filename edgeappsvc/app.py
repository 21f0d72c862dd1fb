"""Application service wiring: configuration, pipelines, routes and run loop."""

from __future__ import annotations

import copy
import logging
from http import HTTPStatus
from typing import Any, Callable

from edgeappsvc.config import AppCustomConfig, ConfigValidationError, ServiceConfig
from edgeappsvc.events import Event
from edgeappsvc.functions import PipelineError, Sample

SERVICE_KEY = "app-new-service"
DEVICE_NAMES_SETTING = "DeviceNames"
CUSTOM_CONFIG_SECTION = "AppCustom"
HELLO_ROUTE = "/api/v3/hello"

FLOATS_PIPELINE_ID = "Floats"
FLOATS_TOPICS = ["events/device/device-virtual/+/Random-Float-Device/#"]
INT32S_PIPELINE_ID = "Int32s"
INT32S_TOPICS = ["events/device/device-virtual/+/+/Int32"]


class App:
    """An application service built on top of a service object.

    The service returned by the factory is expected to provide ``logger``,
    ``app_context``, ``get_app_setting_strings``, ``load_custom_config``,
    ``listen_for_custom_config_changes``, ``set_default_functions_pipeline``,
    ``add_functions_pipeline_for_topics``, ``add_custom_route`` and ``run``.
    Its methods signal failure by raising.
    """

    def __init__(self) -> None:
        self.service: Any = None
        self.logger: Any = logging.getLogger(__name__)
        self.app_context: Any = None
        self.service_config: ServiceConfig = ServiceConfig()
        self.device_names: list[str] = []

    def create_and_run_app_service(
        self, service_key: str, new_service_factory: Callable[[str], Any]
    ) -> int:
        """Build and run the service; return 0 on a clean stop, -1 on failure."""
        self.service = new_service_factory(service_key)
        if self.service is None:
            return -1

        service = self.service
        self.logger = service.logger
        log = self.logger

        try:
            self.device_names = list(service.get_app_setting_strings(DEVICE_NAMES_SETTING))
        except Exception as err:
            log.error("failed to retrieve DeviceNames from configuration: %s", err)
            return -1

        self.service_config = ServiceConfig()
        try:
            service.load_custom_config(self.service_config, CUSTOM_CONFIG_SECTION)
        except Exception as err:
            log.error("failed load custom configuration: %s", err)
            return -1

        try:
            self.service_config.app_custom.validate()
        except ConfigValidationError as err:
            log.error("custom configuration failed validation: %s", err)
            return -1

        try:
            service.listen_for_custom_config_changes(
                self.service_config.app_custom, CUSTOM_CONFIG_SECTION, self.process_config_updates
            )
        except Exception as err:
            log.error("unable to watch custom writable configuration: %s", err)
            return -1

        sample = Sample()

        try:
            service.set_default_functions_pipeline(
                self.filter_by_device_name,
                sample.log_event_details,
                sample.convert_event_to_xml,
                sample.output_xml,
            )
        except Exception as err:
            log.error("SetFunctionsPipeline returned error: %s", err)
            return -1

        try:
            service.add_functions_pipeline_for_topics(
                FLOATS_PIPELINE_ID,
                list(FLOATS_TOPICS),
                sample.log_event_details,
                sample.convert_event_to_xml,
                sample.output_xml,
            )
        except Exception as err:
            log.error("AddFunctionsPipelineForTopic returned error: %s", err)
            return -1

        try:
            service.add_functions_pipeline_for_topics(
                INT32S_PIPELINE_ID,
                list(INT32S_TOPICS),
                sample.log_event_details,
                sample.send_get_command,
                sample.convert_event_to_xml,
                sample.output_xml,
            )
        except Exception as err:
            log.error("AddFunctionsPipelineForTopic returned error: %s", err)
            return -1

        self.app_context = service.app_context

        try:
            service.add_custom_route(HELLO_ROUTE, True, self.hello_handler, "GET")
        except Exception as err:
            log.error("AddCustomRoute returned error: %s", err)
            return -1

        try:
            service.run()
        except Exception as err:
            log.error("Run returned error: %s", err)
            return -1

        return 0

    def filter_by_device_name(self, ctx: Any, data: Any) -> tuple[bool, Any]:
        """Pass on events from the configured devices; stop the pipeline otherwise.

        With no device names configured every event passes.
        """
        log = ctx.logger
        pipeline = ctx.pipeline_id
        log.debug("Filtering by DeviceName in pipeline '%s'", pipeline)

        if data is None:
            return False, PipelineError(
                f"function FilterByDeviceName in pipeline '{pipeline}': No Data Received"
            )
        if not isinstance(data, Event):
            return False, PipelineError(
                f"function FilterByDeviceName in pipeline '{pipeline}': type received is not an Event"
            )

        if not self.device_names or data.device_name in self.device_names:
            log.debug(
                "Event accepted for device '%s' in pipeline '%s'", data.device_name, pipeline
            )
            return True, data

        log.debug("Event not accepted for device '%s' in pipeline '%s'", data.device_name, pipeline)
        return False, None

    def process_config_updates(self, raw_writable_config: Any) -> None:
        """Apply updated writable custom configuration and log what changed."""
        log = self.logger
        if not isinstance(raw_writable_config, AppCustomConfig):
            log.error(
                "unable to process config updates: Can not cast raw config to type 'AppCustomConfig'"
            )
            return

        updated = raw_writable_config
        previous = self.service_config.app_custom
        self.service_config.app_custom = copy.deepcopy(updated)

        if previous == updated:
            log.info("No changes detected")
            return

        if previous.some_value != updated.some_value:
            log.info("AppCustom.SomeValue changed to: %d", updated.some_value)
        if previous.resource_names != updated.resource_names:
            log.info("AppCustom.ResourceNames changed to: %s", updated.resource_names)
        if previous.some_service != updated.some_service:
            log.info("AppCustom.SomeService changed to: %s", updated.some_service)

    def hello_handler(self, request: Any) -> tuple[HTTPStatus, bytes]:
        """Answer the hello route with status 200 and body ``hello``."""
        return HTTPStatus.OK, b"hello"