"""
Method call dispatcher for the wifi_settings channel.
Routes listWifiNetworks, connectToNetwork and disconnect to the host
Wi-Fi service after checking that the host is ready.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from wifi_settings.errors import ErrorCode, WifiSettingsError
from wifi_settings.platform.adapter import REQUIRED_PERMISSIONS, HostPlatform
from wifi_settings.wifi.adapter import HostWifiService
from wifi_settings.wifi.connector import WiFiConnector

logger = logging.getLogger(__name__)

CHANNEL_NAME = "wifi_settings"


@dataclass
class MethodCall:
    """A named operation with string-keyed arguments."""
    method: str
    arguments: Mapping[str, Any] = field(default_factory=dict)

    def argument(self, name: str) -> Any:
        return (self.arguments or {}).get(name)


@dataclass
class MethodResult:
    """Response envelope for a method call."""
    kind: str
    value: Any = None
    code: Optional[str] = None
    message: Optional[str] = None
    details: Any = None

    SUCCESS = "success"
    ERROR = "error"
    NOT_IMPLEMENTED = "not_implemented"

    @classmethod
    def success(cls, value: Any) -> "MethodResult":
        return cls(cls.SUCCESS, value=value)

    @classmethod
    def error(cls, code: Optional[str], message: Optional[str] = None,
              details: Any = None) -> "MethodResult":
        return cls(cls.ERROR, code=code, message=message, details=details)

    @classmethod
    def not_implemented(cls) -> "MethodResult":
        return cls(cls.NOT_IMPLEMENTED)

    @property
    def is_success(self) -> bool:
        return self.kind == self.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        if self.kind == self.SUCCESS:
            return {"status": self.kind, "result": self.value}
        if self.kind == self.ERROR:
            return {
                "status": self.kind,
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        return {"status": self.kind}


class WifiSettingsPlugin:
    """
    Dispatches method calls to the host Wi-Fi service.

    Holds only the two host handles; every call is independent.
    """

    def __init__(self, wifi_service: Optional[HostWifiService],
                 platform: HostPlatform):
        """
        Initialize plugin.

        Args:
            wifi_service: Host Wi-Fi service
            platform: Host permission and location facilities
        """
        self.wifi_service = wifi_service
        self.platform = platform

    def on_method_call(self, call: MethodCall) -> MethodResult:
        """
        Handle one method call.

        Args:
            call: The incoming MethodCall

        Returns:
            MethodResult; failures are returned, never raised
        """
        if call.method == "connectToNetwork":
            return self.connect(call)
        elif call.method == "listWifiNetworks":
            return self.list_wifi_networks()
        elif call.method == "disconnect":
            return self.disconnect()

        logger.debug(f"Method not implemented: {call.method}")
        return MethodResult.not_implemented()

    def list_wifi_networks(self) -> MethodResult:
        """
        List access points found in the most recent scan.

        Gate failures are reported in the message field with no code.
        """
        try:
            self._ensure_ready()
            logger.info("listWifiNetworks() called")

            networks: List[Dict[str, str]] = []
            for sr in self._service().get_scan_results():
                networks.append({
                    "ssid": sr.ssid,
                    "bssid": sr.bssid or "",
                    "capabilities": sr.capabilities,
                    "level": str(sr.level),
                    "frequency": str(sr.frequency),
                })

            logger.info(f"Latest scan results: {len(networks)}")
            return MethodResult.success(networks)

        except WifiSettingsError as e:
            return MethodResult.error(None, str(e))
        except Exception as e:
            logger.error(f"listWifiNetworks() failed: {e}", exc_info=True)
            return MethodResult.error(
                None, ErrorCode.WIFI_MANAGER_ERROR.value)

    def connect(self, call: MethodCall) -> MethodResult:
        """
        Connect to the network named by the 'ssid' argument.

        The result value is the connector's boolean outcome; coded failures
        before the attempt are reported in the code field.
        """
        try:
            self._ensure_ready()
            logger.info("connectToNetwork() called")

            connector = WiFiConnector(self.wifi_service)
            connector.set_credentials(
                call.argument("ssid"), call.argument("password"))
            return MethodResult.success(connector.connect())

        except WifiSettingsError as e:
            return MethodResult.error(str(e))
        except Exception as e:
            logger.error(f"connectToNetwork() failed: {e}", exc_info=True)
            return MethodResult.error(ErrorCode.WIFI_MANAGER_ERROR.value)

    def disconnect(self) -> MethodResult:
        """Disconnect from the current network."""
        try:
            self._ensure_ready()
            logger.info("disconnect() called")
            return MethodResult.success(self._service().disconnect())

        except WifiSettingsError as e:
            return MethodResult.error(str(e))
        except Exception as e:
            logger.error(f"disconnect() failed: {e}", exc_info=True)
            return MethodResult.error(ErrorCode.WIFI_MANAGER_ERROR.value)

    # Readiness gate

    def _service(self) -> HostWifiService:
        if self.wifi_service is None:
            raise WifiSettingsError(ErrorCode.WIFI_MANAGER_ERROR)
        return self.wifi_service

    def _permissions(self) -> bool:
        granted = all(
            self.platform.check_permission(p) for p in REQUIRED_PERMISSIONS)
        if not granted:
            # The current call fails regardless of how the request resolves
            self.platform.request_permissions(REQUIRED_PERMISSIONS)
            return False
        return True

    def _wifi(self) -> bool:
        service = self._service()
        if not service.is_wifi_enabled():
            logger.info("Wi-Fi is disabled; turning it on")
            return service.set_wifi_enabled(True)
        return True

    def _location(self) -> bool:
        if not self.platform.is_location_enabled():
            self.platform.open_location_settings()
            return False
        return True

    def _ensure_ready(self) -> None:
        """
        Raises:
            WifiSettingsError: PERMISSIONS_NOT_GRANTED, WIFI_DISABLED or
                LOCATION_DISABLED, checked in that order
        """
        if not self._permissions():
            raise WifiSettingsError(ErrorCode.PERMISSIONS_NOT_GRANTED)

        if not self._wifi():
            raise WifiSettingsError(ErrorCode.WIFI_DISABLED)

        if not self._location():
            raise WifiSettingsError(ErrorCode.LOCATION_DISABLED)
