"""Custom configuration, device events with XML rendering, sample pipeline functions and service start-up."""

__version__ = "0.1.0"
__all__ = ["app", "config", "events", "functions"]