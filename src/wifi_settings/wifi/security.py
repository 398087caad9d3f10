"""
Security classification and configuration builders.

A scanned network's capability string decides which of three network
blocks is built: open, WEP or WPA-PSK. The suite selections below are
what the host service expects for each class.
"""

import re
from enum import Enum

from wifi_settings.wifi.adapter import (
    AuthAlgorithm,
    ConfigurationStatus,
    GroupCipher,
    KeyMgmt,
    PairwiseCipher,
    Protocol,
    WifiConfiguration,
)

HEX_KEY_PATTERN = re.compile(r"[0-9a-fA-F]+")


class SecurityClass(Enum):
    OPEN = "open"
    WEP = "wep"
    WPA_PSK = "wpa-psk"


def in_double_quotes(value: str) -> str:
    return f'"{value}"'


def classify_capabilities(capabilities: str) -> SecurityClass:
    """
    Classify a capability string. WEP is checked before WPA; first match wins.

    Args:
        capabilities: Scan flags such as '[WPA2-PSK-CCMP][ESS]'

    Returns:
        SecurityClass for the network
    """
    upper = (capabilities or "").upper()
    if "WEP" in upper:
        return SecurityClass.WEP
    if "WPA" in upper:
        return SecurityClass.WPA_PSK
    return SecurityClass.OPEN


def _base_configuration(ssid: str) -> WifiConfiguration:
    return WifiConfiguration(
        ssid=in_double_quotes(ssid),
        status=ConfigurationStatus.ENABLED,
        allowed_protocols={Protocol.RSN, Protocol.WPA},
    )


def open_network_configuration(ssid: str) -> WifiConfiguration:
    """Network with no security. No secret is set."""
    conf = _base_configuration(ssid)
    conf.allowed_key_management = {KeyMgmt.NONE}
    conf.allowed_auth_algorithms = set()
    conf.allowed_pairwise_ciphers = {PairwiseCipher.CCMP, PairwiseCipher.TKIP}
    conf.allowed_group_ciphers = {
        GroupCipher.WEP40,
        GroupCipher.WEP104,
        GroupCipher.CCMP,
        GroupCipher.TKIP,
    }
    return conf


def wep_network_configuration(ssid: str, password: str) -> WifiConfiguration:
    """
    WEP network with 40 or 104 bit keys.

    A key made only of hex digits is stored as-is; anything else is a
    passphrase and is stored quoted.
    """
    conf = _base_configuration(ssid)
    conf.allowed_key_management = {KeyMgmt.NONE}
    conf.allowed_auth_algorithms = {AuthAlgorithm.OPEN, AuthAlgorithm.SHARED}
    conf.allowed_pairwise_ciphers = {PairwiseCipher.CCMP, PairwiseCipher.TKIP}
    conf.allowed_group_ciphers = {GroupCipher.WEP40, GroupCipher.WEP104}

    if HEX_KEY_PATTERN.fullmatch(password):
        conf.wep_keys[0] = password
    else:
        conf.wep_keys[0] = in_double_quotes(password)
    conf.wep_tx_key_index = 0

    return conf


def wpa_network_configuration(ssid: str, password: str) -> WifiConfiguration:
    """WPA/WPA2 personal network. The passphrase is stored quoted."""
    conf = _base_configuration(ssid)
    conf.allowed_key_management = {KeyMgmt.WPA_PSK}
    conf.allowed_pairwise_ciphers = {PairwiseCipher.CCMP, PairwiseCipher.TKIP}
    conf.allowed_group_ciphers = {
        GroupCipher.WEP40,
        GroupCipher.WEP104,
        GroupCipher.CCMP,
        GroupCipher.TKIP,
    }
    conf.pre_shared_key = in_double_quotes(password)
    return conf


def build_configuration(
        security: SecurityClass,
        ssid: str,
        password: str) -> WifiConfiguration:
    """Build the network block for a security class."""
    if security is SecurityClass.WEP:
        return wep_network_configuration(ssid, password)
    if security is SecurityClass.WPA_PSK:
        return wpa_network_configuration(ssid, password)
    return open_network_configuration(ssid)
