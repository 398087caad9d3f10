"""
Network connector.
Finds or builds a configuration for a target network and asks the host
service to enable it and reconnect.
"""

import logging
from typing import Optional

from wifi_settings.errors import ErrorCode, WifiSettingsError
from wifi_settings.wifi.adapter import HostWifiService, ScanResult, WifiConfiguration
from wifi_settings.wifi.security import (
    build_configuration,
    classify_capabilities,
    in_double_quotes,
)

logger = logging.getLogger(__name__)


class WiFiConnector:
    """Connects the host to a single named network."""

    def __init__(self, service: Optional[HostWifiService]):
        """
        Initialize connector.

        Args:
            service: Host Wi-Fi service; None makes every host call fail
                with WIFI_MANAGER_ERROR
        """
        self._service = service
        self.ssid: Optional[str] = None
        self.password: str = ""

    def set_credentials(self, ssid: Optional[str],
                        password: Optional[str]) -> None:
        """
        Set the target network.

        Args:
            ssid: Network name; must be non-empty
            password: Shared secret; None is treated as no secret

        Raises:
            WifiSettingsError: SSID_IS_NULL_OR_EMPTY if ssid is None or empty
        """
        if not ssid:
            raise WifiSettingsError(ErrorCode.SSID_IS_NULL_OR_EMPTY)
        self.ssid = ssid
        self.password = password if password is not None else ""

    def connect(self) -> bool:
        """
        Connect to the network set by set_credentials().

        Returns:
            True if the network was enabled and reconnection was requested,
            False otherwise. The coded reason of a failure is only logged.
        """
        try:
            logger.info(f"Trying to connect to {self.ssid}")

            conf = self._find_configured_network()
            if conf is not None:
                logger.info(
                    f"{self.ssid} is pre-configured (id={conf.network_id}); "
                    "enabling it")
                self._try_with_config(conf, pre_configured=True)
                return True

            result = self._find_scan_result()
            if result is None:
                logger.info(f"{self.ssid} not found in latest scan results")
                raise WifiSettingsError(ErrorCode.NETWORK_NOT_VISIBLE)

            security = classify_capabilities(result.capabilities)
            logger.debug(
                f"Classified {self.ssid} as {security.value} "
                f"from capabilities {result.capabilities!r}")
            conf = build_configuration(security, self.ssid, self.password)
            self._try_with_config(conf, pre_configured=False)
            return True

        except WifiSettingsError as e:
            logger.warning(f"Connection to {self.ssid} failed: {e.code}")
            return False
        except Exception as e:
            logger.warning(
                f"Connection to {self.ssid} failed: {e}", exc_info=True)
            return False

    def _service_or_raise(self) -> HostWifiService:
        if self._service is None:
            raise WifiSettingsError(ErrorCode.WIFI_MANAGER_ERROR)
        return self._service

    def _find_configured_network(self) -> Optional[WifiConfiguration]:
        """Look up the target among networks the host already knows."""
        quoted = in_double_quotes(self.ssid)
        for configuration in self._service_or_raise().get_configured_networks():
            if configuration.ssid is not None and configuration.ssid == quoted:
                return configuration
        return None

    def _find_scan_result(self) -> Optional[ScanResult]:
        """Look up the target in the most recent scan results."""
        latest = self._service_or_raise().get_scan_results()
        logger.debug(f"Scan results size: {len(latest)}")

        for result in latest:
            if result.ssid == self.ssid:
                return result
        return None

    def _try_with_config(self, conf: WifiConfiguration,
                         pre_configured: bool) -> None:
        """
        Enable a configuration and request reconnection.

        Raises:
            WifiSettingsError: FAILED_TO_ENABLE_NETWORK or RECONNECTION_FAILED
        """
        service = self._service_or_raise()

        if pre_configured:
            if not service.enable_network(conf.network_id, False):
                logger.warning(
                    f"Pre-configured but failed to enable network: {conf.ssid}")
                raise WifiSettingsError(ErrorCode.FAILED_TO_ENABLE_NETWORK)
        else:
            network_id = service.add_network(conf)
            if not service.enable_network(network_id, False):
                logger.warning(
                    f"Failed to enable new network: {conf.ssid} (id={network_id})")
                raise WifiSettingsError(ErrorCode.FAILED_TO_ENABLE_NETWORK)

        logger.info(f"Enabled network: {conf.ssid}")
        if not service.reconnect():
            logger.warning(f"Reconnection failed to network: {conf.ssid}")
            raise WifiSettingsError(ErrorCode.RECONNECTION_FAILED)
