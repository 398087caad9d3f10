"""
Host Wi-Fi service interface.
Abstracts the operating system's network-configuration service so the
connector can be driven by wpa_supplicant on a device or by a test double in CI.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set


class KeyMgmt(Enum):
    NONE = "NONE"
    WPA_PSK = "WPA-PSK"


class Protocol(Enum):
    RSN = "RSN"
    WPA = "WPA"


class AuthAlgorithm(Enum):
    OPEN = "OPEN"
    SHARED = "SHARED"


class PairwiseCipher(Enum):
    CCMP = "CCMP"
    TKIP = "TKIP"


class GroupCipher(Enum):
    WEP40 = "WEP40"
    WEP104 = "WEP104"
    CCMP = "CCMP"
    TKIP = "TKIP"


class ConfigurationStatus(Enum):
    CURRENT = "current"
    DISABLED = "disabled"
    ENABLED = "enabled"


class ScanResult:
    """An access point seen in the most recent scan."""

    def __init__(
            self,
            ssid: str,
            capabilities: str = "",
            level: int = 0,
            frequency: int = 0,
            bssid: Optional[str] = None):
        """
        Args:
            ssid: Advertised network name
            capabilities: Security flags as reported by the scan (e.g. '[WPA2-PSK-CCMP][ESS]')
            level: Signal level in dBm
            frequency: Channel frequency in MHz
            bssid: Access point MAC address
        """
        self.ssid = ssid
        self.capabilities = capabilities
        self.level = level
        self.frequency = frequency
        self.bssid = bssid

    def __repr__(self) -> str:
        return (f"ScanResult(ssid={self.ssid!r}, "
                f"capabilities={self.capabilities!r}, level={self.level})")


@dataclass
class WifiConfiguration:
    """
    A network block persisted by the host service.

    The ssid is stored in double quotes, the way the host expects it.
    network_id is -1 until the host assigns one.
    """
    ssid: Optional[str] = None
    network_id: int = -1
    status: ConfigurationStatus = ConfigurationStatus.ENABLED
    allowed_key_management: Set[KeyMgmt] = field(default_factory=set)
    allowed_protocols: Set[Protocol] = field(default_factory=set)
    allowed_auth_algorithms: Set[AuthAlgorithm] = field(default_factory=set)
    allowed_pairwise_ciphers: Set[PairwiseCipher] = field(default_factory=set)
    allowed_group_ciphers: Set[GroupCipher] = field(default_factory=set)
    pre_shared_key: Optional[str] = None
    wep_keys: List[Optional[str]] = field(
        default_factory=lambda: [None, None, None, None])
    wep_tx_key_index: int = 0


class HostWifiService(ABC):
    """Abstract base class for host Wi-Fi service implementations."""

    @abstractmethod
    def get_configured_networks(self) -> List[WifiConfiguration]:
        """
        List the networks already configured on the host.

        Returns:
            List of WifiConfiguration objects with host-assigned network ids
        """

    @abstractmethod
    def get_scan_results(self) -> List[ScanResult]:
        """
        Return the access points found by the most recent scan.

        Returns:
            List of ScanResult objects; empty if nothing was seen
        """

    @abstractmethod
    def add_network(self, config: WifiConfiguration) -> int:
        """
        Register a new network configuration with the host.

        Args:
            config: Configuration to add

        Returns:
            Host-assigned network id, or -1 on failure
        """

    @abstractmethod
    def enable_network(self, network_id: int, disable_others: bool) -> bool:
        """
        Enable a configured network.

        Args:
            network_id: Host-assigned network id
            disable_others: Disable every other configured network

        Returns:
            True if the host accepted the request
        """

    @abstractmethod
    def reconnect(self) -> bool:
        """Ask the host to reassociate. Returns True if accepted."""

    @abstractmethod
    def disconnect(self) -> bool:
        """Disconnect from the current network. Returns True if accepted."""

    @abstractmethod
    def is_wifi_enabled(self) -> bool:
        """Check whether the Wi-Fi radio is on."""

    @abstractmethod
    def set_wifi_enabled(self, enabled: bool) -> bool:
        """
        Request the Wi-Fi radio be turned on or off.

        Best effort: the result only says whether the request was accepted,
        not that the radio has changed state.
        """
