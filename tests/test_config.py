import pytest

from edgeappsvc.config import (
    AppCustomConfig,
    ConfigValidationError,
    HostInfo,
    ServiceConfig,
)


def _valid_custom() -> AppCustomConfig:
    return AppCustomConfig(
        resource_names="Boolean, Int32",
        some_value=987,
        some_service=HostInfo(host="SomeHost"),
    )


def test_validate_accepts_valid_configuration():
    custom = _valid_custom()
    custom.validate()
    assert custom.some_value == 987
    assert custom.some_service.host == "SomeHost"


@pytest.mark.parametrize("value", [0, -5])
def test_validate_rejects_non_positive_some_value(value):
    custom = _valid_custom()
    custom.some_value = value
    with pytest.raises(ConfigValidationError, match="SomeValue must be greater than zero"):
        custom.validate()


def test_validate_rejects_unset_service():
    custom = AppCustomConfig(some_value=987)
    with pytest.raises(ConfigValidationError, match="SomeService is not set"):
        custom.validate()


def test_validate_checks_value_before_service():
    custom = AppCustomConfig()
    with pytest.raises(ConfigValidationError, match="SomeValue"):
        custom.validate()


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        AppCustomConfig().validate()


def test_service_with_only_port_counts_as_set():
    custom = AppCustomConfig(some_value=1, some_service=HostInfo(port=8080))
    custom.validate()
    assert custom.some_service != HostInfo()


def test_update_from_raw_copies_configuration():
    target = ServiceConfig()
    source = ServiceConfig(app_custom=_valid_custom())
    assert target.update_from_raw(source) is True
    assert target == source
    assert target.app_custom.some_service.host == "SomeHost"


@pytest.mark.parametrize("raw", [None, {"AppCustom": {}}, AppCustomConfig(some_value=3)])
def test_update_from_raw_rejects_other_types(raw):
    target = ServiceConfig(app_custom=_valid_custom())
    before = ServiceConfig(app_custom=_valid_custom())
    assert target.update_from_raw(raw) is False
    assert target == before


def test_defaults_are_independent():
    first = AppCustomConfig()
    second = AppCustomConfig()
    first.some_service.host = "SomeHost"
    assert second.some_service == HostInfo()