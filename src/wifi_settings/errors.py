"""
Coded error reasons for the Wi-Fi settings plugin.
Every failure reported to a caller carries exactly one of these codes.
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """Fixed set of coded failure reasons."""
    SSID_IS_NULL_OR_EMPTY = "SSID_IS_NULL_OR_EMPTY"

    # Readiness gate
    PERMISSIONS_NOT_GRANTED = "PERMISSIONS_NOT_GRANTED"
    WIFI_DISABLED = "WIFI_DISABLED"
    LOCATION_DISABLED = "LOCATION_DISABLED"

    # Connection attempt
    RECONNECTION_FAILED = "RECONNECTION_FAILED"
    FAILED_TO_ENABLE_NETWORK = "FAILED_TO_ENABLE_NETWORK"
    WIFI_MANAGER_ERROR = "WIFI_MANAGER_ERROR"
    NETWORK_NOT_VISIBLE = "NETWORK_NOT_VISIBLE"

    def __str__(self) -> str:
        return self.value


class WifiSettingsError(Exception):
    """Raised when an operation fails with a coded reason."""

    def __init__(self, code: ErrorCode):
        super().__init__(code.value)
        self.code = code


class PlatformError(Exception):
    """
    Error returned across the method channel.

    Mirrors the channel's error envelope: a code, a message and optional
    details. Either of code or message may be None depending on which
    operation failed.
    """

    def __init__(
            self,
            code: Optional[str],
            message: Optional[str] = None,
            details: Any = None):
        super().__init__(code or message or "unknown error")
        self.code = code
        self.message = message
        self.details = details

    def __repr__(self) -> str:
        return (f"PlatformError(code={self.code!r}, "
                f"message={self.message!r})")
