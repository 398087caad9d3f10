"""
Unit tests for the method call dispatcher.
Tests routing, the readiness gate and the error envelopes.
"""

import pytest

from wifi_settings.platform.adapter import (
    ACCESS_FINE_LOCATION,
    CHANGE_WIFI_STATE,
    REQUIRED_PERMISSIONS,
)
from wifi_settings.plugin import MethodCall, MethodResult, WifiSettingsPlugin
from wifi_settings.wifi.adapter import ScanResult, WifiConfiguration


@pytest.fixture
def plugin(wifi_service, platform):
    return WifiSettingsPlugin(wifi_service, platform)


class TestMethodCall:
    """Test MethodCall argument access."""

    def test_missing_argument_is_none(self):
        """Test argument() returns None for absent keys."""
        call = MethodCall("connectToNetwork", {"ssid": "Net"})
        assert call.argument("ssid") == "Net"
        assert call.argument("password") is None

    def test_no_arguments(self):
        """Test calls without arguments."""
        assert MethodCall("disconnect").argument("ssid") is None


class TestMethodResult:
    """Test MethodResult envelopes."""

    def test_success_dict(self):
        assert MethodResult.success(True).to_dict() == {
            "status": "success", "result": True}

    def test_error_dict(self):
        assert MethodResult.error("WIFI_DISABLED").to_dict() == {
            "status": "error",
            "code": "WIFI_DISABLED",
            "message": None,
            "details": None,
        }

    def test_not_implemented_dict(self):
        assert MethodResult.not_implemented().to_dict() == {
            "status": "not_implemented"}


class TestRouting:
    """Test method routing."""

    def test_unknown_method(self, plugin, wifi_service):
        """Test unknown method is not implemented and touches nothing."""
        result = plugin.on_method_call(MethodCall("startScan"))
        assert result.kind == MethodResult.NOT_IMPLEMENTED
        assert wifi_service.calls == []


class TestListWifiNetworks:
    """Test the listWifiNetworks operation."""

    def test_returns_string_records(self, plugin, wifi_service):
        """Test scan results become ordered string records."""
        wifi_service.scan_results = [
            ScanResult("Home-5G", "[WPA2-PSK-CCMP][ESS]", -40, 5180,
                       bssid="aa:bb:cc:dd:ee:01"),
            ScanResult("Cafe-Guest", "[ESS]", -71, 2437,
                       bssid="aa:bb:cc:dd:ee:02"),
        ]

        result = plugin.on_method_call(MethodCall("listWifiNetworks"))

        assert result.is_success
        assert result.value == [
            {
                "ssid": "Home-5G",
                "bssid": "aa:bb:cc:dd:ee:01",
                "capabilities": "[WPA2-PSK-CCMP][ESS]",
                "level": "-40",
                "frequency": "5180",
            },
            {
                "ssid": "Cafe-Guest",
                "bssid": "aa:bb:cc:dd:ee:02",
                "capabilities": "[ESS]",
                "level": "-71",
                "frequency": "2437",
            },
        ]

    def test_empty_scan_is_success(self, plugin):
        """Test an empty scan is a valid empty list."""
        result = plugin.on_method_call(MethodCall("listWifiNetworks"))
        assert result.is_success
        assert result.value == []

    def test_gate_failure_in_message(self, plugin, platform):
        """Test gate failures put the coded string in message, not code."""
        platform.location_enabled = False

        result = plugin.on_method_call(MethodCall("listWifiNetworks"))

        assert result.kind == MethodResult.ERROR
        assert result.code is None
        assert result.message == "LOCATION_DISABLED"

    def test_no_service(self, platform):
        """Test a missing host service reports WIFI_MANAGER_ERROR."""
        plugin = WifiSettingsPlugin(None, platform)
        result = plugin.on_method_call(MethodCall("listWifiNetworks"))
        assert result.message == "WIFI_MANAGER_ERROR"


class TestReadinessGate:
    """Test the readiness gate."""

    def test_permissions_missing(self, plugin, platform, wifi_service):
        """Test missing permission requests all and fails this call."""
        platform.granted = set(REQUIRED_PERMISSIONS) - {ACCESS_FINE_LOCATION}

        result = plugin.on_method_call(
            MethodCall("connectToNetwork", {"ssid": "Net"}))

        assert result.code == "PERMISSIONS_NOT_GRANTED"
        assert platform.permission_requests == [REQUIRED_PERMISSIONS]
        assert wifi_service.calls == []

    def test_permissions_fail_every_call(self, plugin, platform):
        """Test the call fails even though a request was made."""
        platform.granted = {CHANGE_WIFI_STATE}

        for _ in range(2):
            result = plugin.on_method_call(MethodCall("disconnect"))
            assert result.code == "PERMISSIONS_NOT_GRANTED"
        assert len(platform.permission_requests) == 2

    def test_wifi_disabled_enable_accepted(self, plugin, wifi_service):
        """Test an accepted enable request lets the call continue."""
        wifi_service.wifi_enabled = False

        result = plugin.on_method_call(MethodCall("listWifiNetworks"))

        assert result.is_success
        assert ("set_wifi_enabled", True) in wifi_service.calls

    def test_wifi_disabled_enable_rejected(self, plugin, wifi_service):
        """Test a rejected enable request fails with WIFI_DISABLED."""
        wifi_service.wifi_enabled = False
        wifi_service.set_wifi_enabled_result = False

        result = plugin.on_method_call(
            MethodCall("connectToNetwork", {"ssid": "Net"}))

        assert result.code == "WIFI_DISABLED"
        assert "get_configured_networks" not in wifi_service.calls

    def test_location_disabled_opens_settings(self, plugin, platform):
        """Test disabled location opens settings and fails this call."""
        platform.location_enabled = False

        result = plugin.on_method_call(MethodCall("disconnect"))

        assert result.code == "LOCATION_DISABLED"
        assert platform.location_settings_opened == 1

    def test_gate_order(self, plugin, platform, wifi_service):
        """Test permissions are checked before Wi-Fi and location."""
        platform.granted = False
        platform.location_enabled = False
        wifi_service.wifi_enabled = False

        result = plugin.on_method_call(MethodCall("disconnect"))

        assert result.code == "PERMISSIONS_NOT_GRANTED"
        assert platform.location_settings_opened == 0
        assert "is_wifi_enabled" not in wifi_service.calls


class TestConnectToNetwork:
    """Test the connectToNetwork operation."""

    def test_empty_ssid_in_code(self, plugin, wifi_service):
        """Test empty ssid is reported in the code field."""
        result = plugin.on_method_call(
            MethodCall("connectToNetwork", {"ssid": "", "password": "x"}))

        assert result.kind == MethodResult.ERROR
        assert result.code == "SSID_IS_NULL_OR_EMPTY"
        assert result.message is None
        assert "get_configured_networks" not in wifi_service.calls

    def test_success(self, plugin, wifi_service):
        """Test a visible network returns success(True)."""
        wifi_service.scan_results = [ScanResult("Cafe-Guest", "[ESS]")]

        result = plugin.on_method_call(
            MethodCall("connectToNetwork", {"ssid": "Cafe-Guest"}))

        assert result.is_success
        assert result.value is True

    def test_connect_failure_is_false_not_error(self, plugin):
        """Test connection failures inside the connector return success(False)."""
        result = plugin.on_method_call(
            MethodCall("connectToNetwork", {"ssid": "Missing", "password": "pw"}))

        assert result.is_success
        assert result.value is False

    def test_pre_configured(self, plugin, wifi_service):
        """Test a pre-configured network connects without a scan lookup."""
        wifi_service.configured = [WifiConfiguration(ssid='"Office"', network_id=2)]

        result = plugin.on_method_call(
            MethodCall("connectToNetwork", {"ssid": "Office", "password": None}))

        assert result.value is True
        assert "get_scan_results" not in wifi_service.calls

    def test_host_exception_during_connect_is_false(self, plugin, wifi_service):
        """Test a crashing host service during connect returns success(False)."""
        def crashed():
            raise RuntimeError("host service crashed")
        wifi_service.get_configured_networks = crashed

        result = plugin.on_method_call(
            MethodCall("connectToNetwork", {"ssid": "Net", "password": "pw"}))

        assert result.is_success
        assert result.value is False


class TestDisconnect:
    """Test the disconnect operation."""

    def test_disconnect_result(self, plugin, wifi_service):
        """Test disconnect returns the host's boolean."""
        assert plugin.on_method_call(MethodCall("disconnect")).value is True

        wifi_service.disconnect_result = False
        assert plugin.on_method_call(MethodCall("disconnect")).value is False

    def test_unexpected_backend_error(self, plugin, wifi_service):
        """Test an unexpected backend exception becomes WIFI_MANAGER_ERROR."""
        def broken():
            raise OSError("socket gone")
        wifi_service.disconnect = broken

        result = plugin.on_method_call(MethodCall("disconnect"))

        assert result.code == "WIFI_MANAGER_ERROR"
