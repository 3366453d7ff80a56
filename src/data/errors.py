"""
src/data/errors.py
──────────────────
Exceptions raised by the monitor's service layer.
"""


class MonitorError(Exception):
    """Base class for all monitor errors."""


class ManualInputError(MonitorError, ValueError):
    """Malformed what-if input. `message` is safe to show to the operator."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class UnknownDeviceError(MonitorError, KeyError):
    def __init__(self, device_id: int):
        super().__init__(device_id)
        self.device_id = device_id

    def __str__(self) -> str:
        return f"Unknown device id: {self.device_id}"
