"""
wpa_supplicant-based host Wi-Fi service.
Shells out to wpa_cli for network configuration and to rfkill for the radio.
"""

import logging
import subprocess
from typing import List, Optional

from wifi_settings.wifi.adapter import (
    ConfigurationStatus,
    HostWifiService,
    ScanResult,
    WifiConfiguration,
)

logger = logging.getLogger(__name__)


class WpaSupplicantService(HostWifiService):
    """Host Wi-Fi service backed by wpa_supplicant / wpa_cli."""

    def __init__(self, interface: str = "wlan0", timeout_seconds: int = 5):
        """
        Initialize wpa_supplicant service.

        Args:
            interface: Wi-Fi interface name (default: wlan0)
            timeout_seconds: Timeout for each wpa_cli command
        """
        self.interface = interface
        self.timeout_seconds = timeout_seconds

    def _wpa_cli(self, *args: str) -> Optional[str]:
        """Run a wpa_cli command; return stripped stdout, or None on error."""
        try:
            result = subprocess.run(
                ['wpa_cli', '-i', self.interface, *args],
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds
            )
            if result.returncode != 0:
                logger.warning(
                    f"wpa_cli {args[0]} exited with {result.returncode}: "
                    f"{result.stderr.strip()}")
                return None
            return result.stdout.strip()
        except (OSError, subprocess.SubprocessError) as e:
            logger.error(f"wpa_cli {args[0]} failed: {e}")
            return None

    def _ok(self, *args: str) -> bool:
        return self._wpa_cli(*args) == 'OK'

    def get_configured_networks(self) -> List[WifiConfiguration]:
        output = self._wpa_cli('list_networks')
        if output is None:
            return []

        networks = []
        for line in output.split('\n')[1:]:  # Skip header
            if not line.strip():
                continue

            # Format: network id / ssid / bssid / flags
            parts = line.split('\t')
            if len(parts) < 2:
                continue

            try:
                network_id = int(parts[0])
            except ValueError:
                continue

            flags = parts[3] if len(parts) > 3 else ""
            if '[CURRENT]' in flags:
                status = ConfigurationStatus.CURRENT
            elif '[DISABLED]' in flags:
                status = ConfigurationStatus.DISABLED
            else:
                status = ConfigurationStatus.ENABLED

            networks.append(WifiConfiguration(
                ssid=f'"{parts[1]}"',
                network_id=network_id,
                status=status,
            ))

        logger.debug(f"Found {len(networks)} configured networks")
        return networks

    def get_scan_results(self) -> List[ScanResult]:
        output = self._wpa_cli('scan_results')
        if output is None:
            return []

        results = []
        for line in output.split('\n')[1:]:  # Skip header
            if not line.strip():
                continue

            # Format: bssid / frequency / signal level / flags / ssid
            parts = line.split('\t')
            if len(parts) < 4:
                continue

            try:
                frequency = int(parts[1])
                level = int(parts[2])
            except ValueError:
                logger.debug(f"Skipping malformed scan line: {line!r}")
                continue

            results.append(ScanResult(
                ssid=parts[4] if len(parts) > 4 else "",
                capabilities=parts[3],
                level=level,
                frequency=frequency,
                bssid=parts[0],
            ))

        logger.info(f"Latest scan has {len(results)} access points")
        return results

    def _network_fields(self, config: WifiConfiguration) -> List[tuple]:
        """Translate a configuration into wpa_supplicant set_network fields."""
        fields = [('ssid', config.ssid)]

        if config.allowed_key_management:
            fields.append(('key_mgmt', ' '.join(
                sorted(k.value for k in config.allowed_key_management))))
        if config.allowed_protocols:
            fields.append(('proto', ' '.join(
                sorted(p.value for p in config.allowed_protocols))))
        if config.allowed_auth_algorithms:
            fields.append(('auth_alg', ' '.join(
                sorted(a.value for a in config.allowed_auth_algorithms))))
        if config.allowed_pairwise_ciphers:
            fields.append(('pairwise', ' '.join(
                sorted(c.value for c in config.allowed_pairwise_ciphers))))
        if config.allowed_group_ciphers:
            fields.append(('group', ' '.join(
                sorted(c.value for c in config.allowed_group_ciphers))))

        if config.pre_shared_key is not None:
            fields.append(('psk', config.pre_shared_key))

        for index, key in enumerate(config.wep_keys):
            if key is not None:
                fields.append((f'wep_key{index}', key))
        if any(key is not None for key in config.wep_keys):
            fields.append(('wep_tx_keyidx', str(config.wep_tx_key_index)))

        return fields

    def add_network(self, config: WifiConfiguration) -> int:
        output = self._wpa_cli('add_network')
        if output is None or 'FAIL' in output:
            logger.error(f"Failed to add network: {output}")
            return -1

        try:
            network_id = int(output.split('\n')[-1])
        except ValueError:
            logger.error(f"Unexpected add_network reply: {output!r}")
            return -1
        logger.debug(f"Added network with ID: {network_id}")

        for name, value in self._network_fields(config):
            if not self._ok('set_network', str(network_id), name, value):
                # Never log the value; it may be a secret
                logger.error(f"Failed to set {name} on network {network_id}")
                self._wpa_cli('remove_network', str(network_id))
                return -1

        if config.status is ConfigurationStatus.DISABLED:
            self._wpa_cli('disable_network', str(network_id))

        return network_id

    def enable_network(self, network_id: int, disable_others: bool) -> bool:
        if network_id < 0:
            return False
        command = 'select_network' if disable_others else 'enable_network'
        return self._ok(command, str(network_id))

    def reconnect(self) -> bool:
        return self._ok('reconnect')

    def disconnect(self) -> bool:
        return self._ok('disconnect')

    def is_wifi_enabled(self) -> bool:
        output = self._wpa_cli('status')
        if output is None:
            return False

        for line in output.split('\n'):
            if line.startswith('wpa_state='):
                return line.split('=', 1)[1] != 'INTERFACE_DISABLED'
        return False

    def set_wifi_enabled(self, enabled: bool) -> bool:
        action = 'unblock' if enabled else 'block'
        try:
            result = subprocess.run(
                ['rfkill', action, 'wifi'],
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds
            )
            if result.returncode != 0:
                logger.warning(f"rfkill {action} wifi failed: {result.stderr.strip()}")
            return result.returncode == 0
        except (OSError, subprocess.SubprocessError) as e:
            logger.error(f"rfkill {action} wifi failed: {e}")
            return False
