"""
Shared test doubles for the host Wi-Fi service and host platform.
"""

import pytest

from wifi_settings.platform.adapter import HostPlatform
from wifi_settings.wifi.adapter import HostWifiService


class FakeWifiService(HostWifiService):
    """Scripted host Wi-Fi service that records every call."""

    def __init__(self, configured=None, scan_results=None):
        self.configured = list(configured or [])
        self.scan_results = list(scan_results or [])
        self.wifi_enabled = True
        self.set_wifi_enabled_result = True
        self.add_network_result = 7
        self.enable_result = True
        self.reconnect_result = True
        self.disconnect_result = True

        self.calls = []
        self.added = []

    def get_configured_networks(self):
        self.calls.append("get_configured_networks")
        return list(self.configured)

    def get_scan_results(self):
        self.calls.append("get_scan_results")
        return list(self.scan_results)

    def add_network(self, config):
        self.calls.append("add_network")
        self.added.append(config)
        return self.add_network_result

    def enable_network(self, network_id, disable_others):
        self.calls.append(("enable_network", network_id, disable_others))
        return self.enable_result

    def reconnect(self):
        self.calls.append("reconnect")
        return self.reconnect_result

    def disconnect(self):
        self.calls.append("disconnect")
        return self.disconnect_result

    def is_wifi_enabled(self):
        self.calls.append("is_wifi_enabled")
        return self.wifi_enabled

    def set_wifi_enabled(self, enabled):
        self.calls.append(("set_wifi_enabled", enabled))
        return self.set_wifi_enabled_result


class FakePlatform(HostPlatform):
    """Scripted host platform that records permission and settings requests."""

    def __init__(self, granted=True, location_enabled=True):
        self.granted = granted
        self.location_enabled = location_enabled
        self.permission_requests = []
        self.location_settings_opened = 0

    def check_permission(self, permission):
        if isinstance(self.granted, bool):
            return self.granted
        return permission in self.granted

    def request_permissions(self, permissions):
        self.permission_requests.append(tuple(permissions))

    def is_location_enabled(self):
        return self.location_enabled

    def open_location_settings(self):
        self.location_settings_opened += 1


@pytest.fixture
def wifi_service():
    return FakeWifiService()


@pytest.fixture
def platform():
    return FakePlatform()
