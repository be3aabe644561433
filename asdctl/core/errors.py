"""Domain-specific errors for asdctl.

Every error carries the process exit status the CLI reports for it. Errors
with ``exit_code`` 0 are printed but leave the exit status untouched.
"""


class AsdctlError(Exception):
    """Base error for asdctl."""

    exit_code = 1


class ModelValidationError(AsdctlError):
    """Raised when a model database file does not conform to schema or semantics."""


class ModelLoadError(AsdctlError):
    """Raised when reading model database files fails."""


class DeviceOpenError(AsdctlError):
    """Raised when a device node cannot be opened."""

    exit_code = 0


class UnsupportedDeviceError(AsdctlError):
    """Raised when a device is not a known model and the operation is not forced."""

    exit_code = 2


class NotAMonitorError(AsdctlError):
    """Raised when a device does not implement the Monitor Control application."""

    exit_code = 0


class BrightnessResolutionError(AsdctlError):
    """Raised when a brightness token cannot be turned into a target value."""

    exit_code = 2


class ProtocolError(AsdctlError):
    """Base HID protocol error."""


class DeviceQueryError(ProtocolError):
    """Raised when querying driver version, device info or applications fails."""


class ReportInitError(ProtocolError):
    """Raised when the driver cannot initialise its report structures.

    This one is fatal for the whole run, not just the current device.
    """


class UsageError(ProtocolError):
    """Raised on get/set usage failures."""

    exit_code = 2


class ReportError(ProtocolError):
    """Raised on get/set report failures."""

    exit_code = 3
