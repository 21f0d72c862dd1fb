"""Structured custom configuration for the application service."""

from __future__ import annotations

from dataclasses import dataclass, field


class ConfigValidationError(ValueError):
    """Raised when custom configuration holds invalid values."""


@dataclass
class HostInfo:
    """Connection information for an external service."""

    host: str = ""
    port: int = 0
    protocol: str = ""


@dataclass
class AppCustomConfig:
    """The service's custom configuration section ("AppCustom")."""

    resource_names: str = ""
    some_value: int = 0
    some_service: HostInfo = field(default_factory=HostInfo)

    def validate(self) -> None:
        """Raise ConfigValidationError if the configuration is not usable."""
        if self.some_value <= 0:
            raise ConfigValidationError("SomeValue must be greater than zero")
        if self.some_service == HostInfo():
            raise ConfigValidationError("SomeService is not set")


@dataclass
class ServiceConfig:
    """Outer configuration wrapping the custom configuration section."""

    app_custom: AppCustomConfig = field(default_factory=AppCustomConfig)

    def update_from_raw(self, raw_config: object) -> bool:
        """Replace this configuration with ``raw_config``.

        Returns False, leaving this configuration untouched, when
        ``raw_config`` is not a ServiceConfig.
        """
        if not isinstance(raw_config, ServiceConfig):
            return False
        self.app_custom = raw_config.app_custom
        return True