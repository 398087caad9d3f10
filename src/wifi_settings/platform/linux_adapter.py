"""
Linux host platform.

There are no runtime permission prompts on Linux: access to Wi-Fi is
governed by access to the wpa_supplicant control socket directory. Reading
scan and network state needs read access, changing it needs write access.
"""

import logging
import os
from typing import Sequence

from wifi_settings.platform.adapter import HostPlatform

logger = logging.getLogger(__name__)


class LinuxPlatform(HostPlatform):
    """Host platform implementation for Linux with wpa_supplicant."""

    def __init__(
            self,
            enforce_permissions: bool = False,
            control_dir: str = "/var/run/wpa_supplicant",
            location_enabled: bool = True):
        """
        Initialize Linux platform.

        Args:
            enforce_permissions: Check control socket access; when False every
                permission is treated as granted
            control_dir: wpa_supplicant control interface directory
            location_enabled: Whether location services count as enabled
        """
        self.enforce_permissions = enforce_permissions
        self.control_dir = control_dir
        self.location_enabled = location_enabled

    def check_permission(self, permission: str) -> bool:
        if not self.enforce_permissions:
            return True

        mode = os.W_OK if permission.startswith("CHANGE_") else os.R_OK
        return os.access(self.control_dir, mode)

    def request_permissions(self, permissions: Sequence[str]) -> None:
        missing = [p for p in permissions if not self.check_permission(p)]
        logger.warning(
            f"Permissions not granted: {', '.join(missing) or 'none'}. "
            f"Grant the service user access to {self.control_dir} "
            "(e.g. add it to the netdev group)")

    def is_location_enabled(self) -> bool:
        return self.location_enabled

    def open_location_settings(self) -> None:
        logger.warning(
            "Location services are disabled; enable 'platform.location_enabled' "
            "in the configuration and retry")
