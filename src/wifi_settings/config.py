import copy
import os
import yaml

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(__file__), '..', '..', 'config.yaml')

DEFAULT_CONFIG = {
    'wifi': {
        'interface': 'wlan0',
        'command_timeout_seconds': 5,
    },
    'platform': {
        'enforce_permissions': False,
        'control_dir': '/var/run/wpa_supplicant',
        'location_enabled': True,
    },
    'channel': {
        'host': '127.0.0.1',
        'port': 8080,
        'secret_key': None,
    },
    'logging': {
        'level': 'INFO',
        'file': None,
    },
}


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def resolve_config_path(path: str | None = None) -> str:
    cfg_path = path or os.environ.get(
        'WIFI_SETTINGS_CONFIG') or DEFAULT_CONFIG_PATH
    return os.path.abspath(os.path.expanduser(cfg_path))


def load_config(path: str | None = None) -> dict:
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    cfg_path = resolve_config_path(path)
    if not os.path.exists(cfg_path):
        return cfg
    with open(cfg_path, 'r', encoding='utf-8') as fh:
        return _merge(cfg, yaml.safe_load(fh) or {})
