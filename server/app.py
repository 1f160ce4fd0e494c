"""Flask application exposing the host printers over HTTP."""
from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Blueprint, Flask, current_app, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from common.interface import DrawerRequest, PrintRequest
from config import settings
from printer.backends import build_service
from printer.errors import GatewayError, InvalidRequest, InvalidURL, UnknownPrinter
from printer.service import PrintOrchestrator

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
EXTENSION_KEY = "print_gateway"

printer_bp = Blueprint("printer", __name__)

# failures the caller can fix by changing the request
_CLIENT_ERRORS = (InvalidRequest, InvalidURL, UnknownPrinter)


def json_response(data: Any, status: int = 200):
    body = current_app.json.dumps(data)
    return current_app.response_class(f"{body}\n", status=status, content_type=JSON_CONTENT_TYPE)


def error_response(status: int, message: str, exc: Optional[BaseException] = None):
    body = {"error": message}
    if exc is not None:
        body["details"] = str(exc)
    return json_response(body, status)


def _service() -> PrintOrchestrator:
    return current_app.extensions[EXTENSION_KEY]["service"]


def _logger() -> logging.Logger:
    return current_app.extensions[EXTENSION_KEY]["logger"]


def _failure(exc: GatewayError, message: str):
    if isinstance(exc, _CLIENT_ERRORS):
        _logger().warning("%s: %s", message, exc)
        return error_response(400, str(exc))
    _logger().error("%s: %s", message, exc)
    return error_response(500, message, exc)


def _json_body():
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        raise InvalidRequest("Solicitud JSON inválida")
    return payload


@printer_bp.route("/health", methods=["GET"])
def health_check():
    _logger().info("Received request: /health")
    return json_response({"running": True})


@printer_bp.route("/list-printers", methods=["GET"])
def list_printers():
    _logger().info("Received request: /list-printers")
    try:
        printers = _service().list_printers()
    except GatewayError as exc:
        return _failure(exc, "Error al listar las impresoras")
    return json_response({"printers": printers})


@printer_bp.route("/print", methods=["POST"])
def print_document():
    _logger().info("Received request: /print")
    try:
        print_request = PrintRequest.from_dict(_json_body())
        _service().print_from_url(print_request)
    except GatewayError as exc:
        return _failure(exc, "Error al imprimir el archivo")
    return json_response({"message": "PDF enviado a la impresora exitosamente."})


@printer_bp.route("/open-box", methods=["POST"])
def open_box():
    _logger().info("Received request: /open-box")
    try:
        drawer_request = DrawerRequest.from_dict(_json_body())
        _service().open_drawer(drawer_request)
    except GatewayError as exc:
        return _failure(exc, "Error al abrir el cajón")
    return json_response({"message": "Cajón abierto exitosamente."})


def _handle_http_error(exc: HTTPException):
    if exc.code == 405:
        _logger().warning("Method not allowed: %s %s", request.method, request.path)
        return error_response(405, "Método HTTP no permitido")
    return error_response(exc.code or 500, exc.description or exc.name)


def _handle_unexpected(exc: Exception):
    _logger().exception("Unhandled error on %s", request.path)
    return error_response(500, "Error interno del servidor", exc)


def create_app(
        service: Optional[PrintOrchestrator] = None,
        logger: Optional[logging.Logger] = None,
        allowed_origins: Optional[list] = None,
) -> Flask:
    logger = logger or logging.getLogger(__name__)
    if service is None:
        service = build_service(settings.TOOLS, settings.FETCH, logger=logger)
    if allowed_origins is None:
        allowed_origins = settings.SERVICE.get("allowed_origins") or ["*"]

    app = Flask(__name__)
    app.json.ensure_ascii = False
    app.extensions[EXTENSION_KEY] = {"service": service, "logger": logger}
    CORS(
        app,
        origins=allowed_origins,
        methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept", "x-app-version"],
        supports_credentials=False,
        send_wildcard="*" in allowed_origins,
        max_age=300,
    )
    app.register_blueprint(printer_bp)
    app.register_error_handler(HTTPException, _handle_http_error)
    app.register_error_handler(Exception, _handle_unexpected)
    return app
