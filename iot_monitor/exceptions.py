"""Exception hierarchy for the IoT monitor services.

Every service error derives from :class:`IoTMonitorError` and carries the
HTTP status the API layer answers with (see ``iot_monitor.main``).

::

    IoTMonitorError      (500)
    ├── ValidationError  (400: one or more rule violations)
    ├── NotFoundError    (404: no record with that sequential id)
    ├── ConflictError    (409: delete blocked by dependent records)
    └── StorageError     (500: database failure)
"""

from typing import List, Optional


class IoTMonitorError(Exception):
    """Base exception for all service errors."""

    http_status: int = 500

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(IoTMonitorError):
    """Input failed validation. ``errors`` keeps every violation found."""

    http_status: int = 400

    def __init__(self, errors, message: Optional[str] = None):
        if isinstance(errors, str):
            errors = [errors]
        self.errors: List[str] = list(errors)
        super().__init__(message or ", ".join(self.errors))


class NotFoundError(IoTMonitorError):
    http_status: int = 404


class ConflictError(IoTMonitorError):
    http_status: int = 409


class StorageError(IoTMonitorError):
    http_status: int = 500
