# edgeappsvc

Building blocks for an edge application service that processes device
events. An event can be filtered by device name and logged with its
readings. It can then be converted to XML. The XML is handed back as the
response data of the pipeline.

## Modules

### `edgeappsvc.config`

This module holds the custom configuration, as the dataclasses
`ServiceConfig`, `AppCustomConfig` and `HostInfo`.

- `AppCustomConfig.validate()` raises `ConfigValidationError` in two cases:
  - `some_value` is not greater than zero.
  - `some_service` is still an empty `HostInfo`.
- `ServiceConfig.update_from_raw(raw)` copies the custom section of `raw`
  into the configuration and returns `True`. If `raw` is not a
  `ServiceConfig`, it returns `False` and changes nothing.

### `edgeappsvc.events`

This module holds the event model: `Event`, `Reading` and
`new_event(profile_name, device_name, source_name)`. `new_event()` gives the
event a fresh UUID and the current time in nanoseconds.

`Event.add_simple_reading(resource_name, value_type, value)` appends a
reading and returns it. The value type is one of these:

- `Bool`
- `String`
- `Int8` … `Int64`
- `Uint8` … `Uint64`
- `Float32`
- `Float64`

The value is checked against its type and range. A mismatch raises
`ValueError`, and so does a `Binary` or unknown type.

`Event.to_xml()` renders the event as an XML string. A tag name that is not
a valid XML element name raises `ValueError`.

### `edgeappsvc.functions`

The pipeline functions are methods of `Sample`:

| Method | What it does |
| --- | --- |
| `log_event_details` | Logs the event and each of its readings, and passes the event on. |
| `send_get_command` | Queries the device's commands through the context's command client. It issues the first GET command it finds and passes on the event that comes back. |
| `convert_event_to_xml` | Converts the event to an XML string. It also counts the conversion in a `Counter`, which it registers as `EventsConvertedToXML` with the metrics manager, if one is available. |
| `output_xml` | Sets the XML as the response data with content type `application/xml`, and ends the pipeline. |

Each method takes a context and the data from the previous step. It returns
`(continue_pipeline, result)`. On failure it returns `False` and a
`PipelineError`; it does not raise.

The context is any object with these attributes, as the functions need them:

- `logger`
- `pipeline_id`
- `command_client`, with `device_core_commands_by_device_name` and
  `issue_get_command_by_name`
- `metrics_manager`, with `register`
- `set_response_data`
- `set_response_content_type`

### `edgeappsvc.app`

`App.create_and_run_app_service(service_key, factory)` calls
`factory(service_key)` to obtain a service object. In order, it then does
the following:

1. Reads the `DeviceNames` setting.
2. Loads and validates the `AppCustom` configuration.
3. Listens for configuration changes.
4. Sets the default pipeline:
   `filter_by_device_name` → `log_event_details` → `convert_event_to_xml`
   → `output_xml`.
5. Adds the `Floats` and `Int32s` topic pipelines.
6. Adds the `/api/v3/hello` GET route.
7. Calls `run()`.

It returns `0` on success. It returns `-1` if the factory returns `None` or
any step raises; in that case the error is logged.

`App` also provides three other methods:

- `App.filter_by_device_name` passes on events from the configured devices.
  If no devices are configured, it passes on every event.
- `App.process_config_updates` applies an updated `AppCustomConfig` and
  logs which fields changed.
- `App.hello_handler` returns `(HTTPStatus.OK, b"hello")`.

## Example

```python
import logging
from types import SimpleNamespace

from edgeappsvc.events import new_event
from edgeappsvc.functions import Sample

logging.basicConfig(level=logging.INFO)
ctx = SimpleNamespace(
    logger=logging.getLogger("pipeline"),
    pipeline_id="default",
    metrics_manager=None,  # without a manager the counter is kept but not reported
)

event = new_event("MyProfile", "MyDevice", "MySource")
event.add_simple_reading("MyResource", "Int32", 1234)

sample = Sample()
keep_going, xml = sample.convert_event_to_xml(ctx, event)
print(keep_going, xml)
```

## What this package does not do

The package has no service runtime of its own. It has no message bus
connection, HTTP server, configuration provider or command client. `App`
drives whatever service object its factory supplies, and the pipeline
functions use whatever context they are given. There is no command-line
entry point.

## Tests

```
pip install .[test]
pytest
```