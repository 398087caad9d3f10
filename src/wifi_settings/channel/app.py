"""
HTTP method channel for the wifi_settings plugin.
Carries method calls from the application layer to the plugin as JSON.
Requests must present a signed token issued by the channel.
"""

import logging
import os
from typing import Optional

from flask import Flask, jsonify, request
from itsdangerous import BadData, URLSafeTimedSerializer

from wifi_settings.plugin import CHANNEL_NAME, MethodCall, WifiSettingsPlugin

logger = logging.getLogger(__name__)

TOKEN_MAX_AGE_SECONDS = 3600


def create_app(plugin: Optional[WifiSettingsPlugin] = None,
               secret_key: Optional[str] = None) -> Flask:
    """
    Create and configure Flask application for the method channel.

    Args:
        plugin: WifiSettingsPlugin instance
        secret_key: Key used to sign channel tokens

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)

    app.config['SECRET_KEY'] = secret_key or os.environ.get(
        'WIFI_SETTINGS_SECRET_KEY', 'wifi-settings-dev-key')

    serializer = URLSafeTimedSerializer(
        app.config['SECRET_KEY'], salt='wifi-settings-channel')

    # Dependency injection
    app.plugin = plugin

    def verify_token(token: str) -> bool:
        try:
            serializer.loads(token, max_age=TOKEN_MAX_AGE_SECONDS)
            return True
        except BadData:
            return False

    @app.route('/api/channel/token', methods=['GET'])
    def token():
        """Issue a channel token."""
        return jsonify({
            'token': serializer.dumps({'nonce': os.urandom(16).hex()})
        })

    @app.route(f'/api/channel/{CHANNEL_NAME}', methods=['POST'])
    def method_call():
        """
        Dispatch one method call.

        Expected JSON:
            {
                "method": "connectToNetwork",
                "arguments": {"ssid": "...", "password": "..."},
                "token": "token"
            }

        Returns:
            JSON result envelope
        """
        data = request.get_json(silent=True) or {}

        channel_token = data.get('token')
        if not channel_token or not verify_token(channel_token):
            logger.warning("Channel token verification failed")
            return jsonify({'error': 'Invalid channel token'}), 403

        method = data.get('method')
        if not method or not isinstance(method, str):
            logger.warning("Method call without a method name")
            return jsonify({'error': 'method is required'}), 400

        arguments = data.get('arguments') or {}
        if not isinstance(arguments, dict):
            return jsonify({'error': 'arguments must be an object'}), 400

        if not app.plugin:
            logger.error("Plugin not configured")
            return jsonify({'error': 'Plugin not available'}), 500

        logger.debug(f"Dispatching {method}")
        result = app.plugin.on_method_call(MethodCall(method, arguments))
        return jsonify(result.to_dict())

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint."""
        return jsonify({'status': 'ok'})

    return app
