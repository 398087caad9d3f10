"""
Host platform interface for runtime permissions and location services.
Allows test doubles to be injected in CI environments.
"""

from abc import ABC, abstractmethod
from typing import Sequence

ACCESS_COARSE_LOCATION = "ACCESS_COARSE_LOCATION"
ACCESS_FINE_LOCATION = "ACCESS_FINE_LOCATION"
ACCESS_NETWORK_STATE = "ACCESS_NETWORK_STATE"
ACCESS_WIFI_STATE = "ACCESS_WIFI_STATE"
CHANGE_WIFI_STATE = "CHANGE_WIFI_STATE"
CHANGE_NETWORK_STATE = "CHANGE_NETWORK_STATE"

# All of these must be granted before scanning or connecting
REQUIRED_PERMISSIONS = (
    ACCESS_COARSE_LOCATION,
    ACCESS_FINE_LOCATION,
    ACCESS_NETWORK_STATE,
    ACCESS_WIFI_STATE,
    CHANGE_WIFI_STATE,
    CHANGE_NETWORK_STATE,
)


class HostPlatform(ABC):
    """Abstract base class for host platform implementations."""

    @abstractmethod
    def check_permission(self, permission: str) -> bool:
        """
        Check whether a runtime permission is granted.

        Args:
            permission: One of the names in REQUIRED_PERMISSIONS

        Returns:
            True if granted
        """

    @abstractmethod
    def request_permissions(self, permissions: Sequence[str]) -> None:
        """
        Ask for permissions to be granted.

        Fire-and-forget: callers must not wait on or assume the outcome.
        """

    @abstractmethod
    def is_location_enabled(self) -> bool:
        """Check whether the location provider is enabled."""

    @abstractmethod
    def open_location_settings(self) -> None:
        """Send the user to the location settings so they can enable it."""
