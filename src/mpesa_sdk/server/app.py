"""
Example web server exposing the SDK over HTTP
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from mpesa_sdk.sdk import Mpesa
from mpesa_sdk.server.callbacks import callbacks_bp
from mpesa_sdk.server.routes import mpesa_bp
from mpesa_sdk.utils.errors import ApiError, AuthenticationError, MpesaError, RequestValidationError

logger = logging.getLogger(__name__)

SERVICE_NAME = "mpesa-sdk-example"


def create_app(mpesa: Mpesa) -> Flask:
    """Build the Flask app around an already-configured client.

    The client is shared by every request for the lifetime of the app, so
    its token cache is reused across routes.
    """
    app = Flask(__name__)
    app.extensions["mpesa"] = mpesa

    app.register_blueprint(mpesa_bp, url_prefix="/api/mpesa")
    app.register_blueprint(callbacks_bp, url_prefix="/api/mpesa/callbacks")

    @app.before_request
    def log_request():
        logger.info(f"{request.method} {request.path}")

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "environment": mpesa.config.settings.environment.value,
        }), 200

    register_error_handlers(app)
    return app


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(RequestValidationError)
    def handle_validation_error(error: RequestValidationError):
        return jsonify({
            "success": False,
            "error": {
                "message": "Validation failed",
                "code": error.code,
                "details": error.errors,
            },
        }), 400

    @app.errorhandler(AuthenticationError)
    def handle_auth_error(error: AuthenticationError):
        logger.error(f"Authentication with M-Pesa failed: {error}")
        return jsonify({
            "success": False,
            "error": {
                "message": "M-Pesa authentication failed",
                "code": error.code,
                "details": str(error),
            },
        }), 502

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError):
        logger.error(f"M-Pesa API request failed: {error}")
        return jsonify({
            "success": False,
            "error": {
                "message": "M-Pesa API request failed",
                "code": error.code,
                "status": error.status_code,
                "details": str(error),
            },
        }), 502

    @app.errorhandler(MpesaError)
    def handle_mpesa_error(error: MpesaError):
        logger.error(f"M-Pesa error: {error}")
        return jsonify({
            "success": False,
            "error": {"message": str(error), "code": error.code},
        }), error.status_code or 500

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        message = "Route not found" if error.code == 404 else error.description
        return jsonify({"success": False, "error": {"message": message}}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        logger.exception(f"Unhandled error: {error}")
        details = {"details": str(error)} if app.debug else {}
        return jsonify({
            "success": False,
            "error": {"message": "Internal server error", **details},
        }), 500
