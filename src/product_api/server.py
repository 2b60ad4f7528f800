import argparse
import logging
import time
from typing import Optional

from flask import Blueprint, Flask, current_app, g, json, jsonify, redirect, request, url_for
from werkzeug.exceptions import HTTPException

from .config import Settings
from .errors import PayloadError, StoreError
from .logging_config import setup_logging
from .openapi import build_openapi, swagger_ui_html
from .payload import parse_id, parse_product
from .store import InMemoryStore

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("product_api.access")

STORE_KEY = "product_store"
NOT_FOUND = "product not found"

api = Blueprint("api", __name__)


def _store() -> InMemoryStore:
    return current_app.extensions[STORE_KEY]


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _read_body():
    data = request.get_json(force=True, silent=True)
    if data is None:
        raise PayloadError("invalid JSON body")
    return parse_product(data)


@api.errorhandler(PayloadError)
def bad_request(exc: PayloadError):
    return _error(exc.message, 400)


@api.get("/products")
def list_products():
    try:
        products = _store().list()
    except StoreError:
        logger.exception("Listing products failed")
        return _error("unable to list products", 500)
    return jsonify([p.to_dict() for p in products]), 200


@api.post("/products")
def create_product():
    product = _read_body()
    try:
        created = _store().create(product)
    except StoreError:
        logger.exception("Creating product failed")
        return _error("unable to create product", 500)
    return jsonify(created.to_dict()), 201


@api.get("/products/<raw_id>")
def get_product(raw_id: str):
    pid = parse_id(raw_id)
    try:
        prod = _store().get(pid)
    except StoreError:
        logger.exception("Fetching product %d failed", pid)
        return _error("server error", 500)
    if prod is None:
        return _error(NOT_FOUND, 404)
    return jsonify(prod.to_dict()), 200


@api.put("/products/<raw_id>")
def update_product(raw_id: str):
    pid = parse_id(raw_id)
    product = _read_body()
    try:
        updated = _store().update(pid, product)
    except StoreError:
        logger.exception("Updating product %d failed", pid)
        return _error("server error", 500)
    if updated is None:
        return _error(NOT_FOUND, 404)
    return jsonify(updated.to_dict()), 200


@api.delete("/products/<raw_id>")
def delete_product(raw_id: str):
    pid = parse_id(raw_id)
    try:
        deleted = _store().delete(pid)
    except StoreError:
        logger.exception("Deleting product %d failed", pid)
        return _error("server error", 500)
    if not deleted:
        return _error(NOT_FOUND, 404)
    return "", 204


@api.get("/openapi.json")
def openapi_document():
    return jsonify(build_openapi()), 200


@api.get("/docs")
def swagger_ui():
    return swagger_ui_html(url_for("api.openapi_document")), 200


def create_app(store: Optional[InMemoryStore] = None) -> Flask:
    app = Flask(__name__)
    app.extensions[STORE_KEY] = store if store is not None else InMemoryStore()
    app.register_blueprint(api, url_prefix="/api")

    @app.get("/swagger/")
    @app.get("/swagger/index.html")
    def _swagger_redirect():
        return redirect(url_for("api.swagger_ui"))

    @app.before_request
    def _start_timer():
        g.started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        elapsed_ms = (time.perf_counter() - g.get("started", time.perf_counter())) * 1000
        access_logger.info(
            "%s %s %d %.2fms", request.method, request.path, response.status_code, elapsed_ms
        )
        return response

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        # keep headers such as Allow, swap the HTML body for JSON
        response = exc.get_response()
        response.data = json.dumps({"error": exc.name.lower()})
        response.content_type = "application/json"
        return response

    @app.errorhandler(Exception)
    def _unhandled(exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return _error("server error", 500)

    return app


def main(argv=None) -> None:
    settings = Settings.from_env()
    parser = argparse.ArgumentParser(description="Serve the product management API")
    parser.add_argument("--host", default=settings.host, help="Address to listen on")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    parser.add_argument("--log-level", default=settings.log_level, help="Root log level")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    # our own access log replaces werkzeug's per-request lines
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

    app = create_app()
    logger.info("Serving product API on http://%s:%d/api", args.host, args.port)
    # threaded=True: one thread per request, the store handles the locking
    app.run(host=args.host, port=args.port, threaded=True)


if __name__ == "__main__":
    main()
