"""
Wi-Fi settings service entry point.
Builds the plugin from configuration and serves it over the HTTP method channel.
"""

import argparse
import sys
from typing import List, Optional

from wifi_settings.channel.app import create_app
from wifi_settings.config import load_config, resolve_config_path
from wifi_settings.logging import configure_logging, get_logger
from wifi_settings.platform.linux_adapter import LinuxPlatform
from wifi_settings.plugin import WifiSettingsPlugin
from wifi_settings.wifi.wpa_adapter import WpaSupplicantService

logger = get_logger("service")


def build_plugin(config: dict) -> WifiSettingsPlugin:
    """
    Create the plugin with the wpa_supplicant backend and Linux platform.

    Args:
        config: Configuration as returned by load_config()

    Returns:
        WifiSettingsPlugin instance
    """
    wifi_cfg = config.get('wifi', {})
    platform_cfg = config.get('platform', {})

    wifi_service = WpaSupplicantService(
        interface=wifi_cfg.get('interface', 'wlan0'),
        timeout_seconds=int(wifi_cfg.get('command_timeout_seconds', 5)),
    )
    platform = LinuxPlatform(
        enforce_permissions=bool(platform_cfg.get('enforce_permissions', False)),
        control_dir=platform_cfg.get('control_dir', '/var/run/wpa_supplicant'),
        location_enabled=bool(platform_cfg.get('location_enabled', True)),
    )

    logger.info(f"Using wpa_supplicant on interface {wifi_service.interface}")
    return WifiSettingsPlugin(wifi_service, platform)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='wifi-settings',
        description='Serve the wifi_settings method channel')
    parser.add_argument('--config', help='Path to config.yaml')
    parser.add_argument('--host', help='Address to bind')
    parser.add_argument('--port', type=int, help='Port to bind')
    parser.add_argument('--log-level', help='DEBUG, INFO, WARNING or ERROR')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Service entry point."""
    args = _parse_args(argv)

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        return 1

    log_cfg = config.get('logging', {})
    configure_logging(
        log_level=args.log_level or log_cfg.get('level', 'INFO'),
        log_file=log_cfg.get('file'))

    channel_cfg = config.get('channel', {})
    host = args.host or channel_cfg.get('host', '127.0.0.1')
    port = args.port or int(channel_cfg.get('port', 8080))

    logger.info(f"Configuration: {resolve_config_path(args.config)}")

    try:
        plugin = build_plugin(config)
        app = create_app(plugin, secret_key=channel_cfg.get('secret_key'))

        logger.info(f"Serving wifi_settings channel on http://{host}:{port}")
        app.run(host=host, port=port, debug=False)
        return 0

    except KeyboardInterrupt:
        logger.warning("Service interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error in wifi-settings service: {e}",
                     exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
