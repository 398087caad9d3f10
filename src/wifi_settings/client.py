"""
Application-side client for the wifi_settings method channel.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from wifi_settings.errors import PlatformError
from wifi_settings.plugin import CHANNEL_NAME

logger = logging.getLogger(__name__)

CHANNEL_ERROR = "CHANNEL_ERROR"


class WifiSettingsClient:
    """
    Calls the plugin over its HTTP method channel.

    Error envelopes are raised as PlatformError with the channel's code,
    message and details.
    """

    def __init__(self, base_url: str, timeout_seconds: int = 10,
                 session: Optional[requests.Session] = None):
        """
        Initialize client.

        Args:
            base_url: Channel base URL, e.g. http://127.0.0.1:8080
            timeout_seconds: HTTP request timeout
            session: Optional requests session to reuse
        """
        self.base_url = base_url.rstrip('/')
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        self._token: Optional[str] = None

    def list_wifi_networks(self) -> List[Dict[str, str]]:
        """Access points from the most recent scan."""
        return self._invoke("listWifiNetworks") or []

    def connect_to_network(self, ssid: str,
                           password: Optional[str] = None) -> bool:
        """Connect to a network; returns the plugin's boolean outcome."""
        return bool(self._invoke(
            "connectToNetwork", {"ssid": ssid, "password": password}))

    def disconnect(self) -> bool:
        return bool(self._invoke("disconnect"))

    def _fetch_token(self) -> str:
        response = self.session.get(
            f"{self.base_url}/api/channel/token",
            timeout=self.timeout_seconds
        )
        response.raise_for_status()
        return response.json()["token"]

    def _post(self, method: str, arguments: Dict[str, Any]) -> requests.Response:
        if self._token is None:
            self._token = self._fetch_token()
        return self.session.post(
            f"{self.base_url}/api/channel/{CHANNEL_NAME}",
            json={"method": method, "arguments": arguments, "token": self._token},
            timeout=self.timeout_seconds
        )

    def _invoke(self, method: str,
                arguments: Optional[Dict[str, Any]] = None) -> Any:
        try:
            response = self._post(method, arguments or {})
            if response.status_code == 403:
                # Token expired; fetch a new one and retry once
                logger.debug("Channel token rejected; refreshing")
                self._token = None
                response = self._post(method, arguments or {})
            response.raise_for_status()
            envelope = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Channel call {method} failed: {e}")
            raise PlatformError(CHANNEL_ERROR, str(e)) from e
        except (KeyError, ValueError) as e:
            logger.error(f"Bad channel response for {method}: {e}")
            raise PlatformError(CHANNEL_ERROR, str(e)) from e

        status = envelope.get("status")
        if status == "success":
            return envelope.get("result")
        if status == "not_implemented":
            raise NotImplementedError(method)

        raise PlatformError(
            envelope.get("code"),
            envelope.get("message"),
            envelope.get("details"),
        )
