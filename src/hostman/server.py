"""Flask application factory for the hostman service.

Endpoints:

- ``GET /update/<hostname>/<ip>`` - upsert one entry, return the merged table.
- ``GET /get`` - return the stored table unchanged.
- ``GET /health`` - liveness check.

Every response body is JSON. Failures return ``{"error": ...}`` and never a
partial table.
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

from .exceptions import PersistenceError
from .parsing import is_address, is_alias
from .store import TableStore

logger = logging.getLogger("hostman.server")

_HTTP_BAD_REQUEST = 400
_HTTP_SERVER_ERROR = 500


def create_app(store: TableStore) -> Flask:
    """Create the Flask application serving *store*."""
    app = Flask("hostman")
    app.url_map.strict_slashes = False

    @app.route("/update/<hostname>/<ip>/")
    def update(hostname: str, ip: str) -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Report-and-fetch."""
        if not is_alias(hostname):
            return jsonify({"error": f"Invalid hostname: {hostname!r}"}), _HTTP_BAD_REQUEST
        if not is_address(ip):
            return jsonify({"error": f"Invalid address: {ip!r}"}), _HTTP_BAD_REQUEST
        table = store.report(hostname, ip)
        return jsonify(table.to_dict())

    @app.route("/get/")
    def get() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Fetch-only."""
        return jsonify(store.fetch().to_dict())

    @app.route("/health")
    def health() -> Response:  # pyright: ignore[reportUnusedFunction]
        return jsonify({"status": "ok"})

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException) -> tuple[Response, int]:  # pyright: ignore[reportUnusedFunction]
        return jsonify({"error": error.description}), error.code or _HTTP_SERVER_ERROR

    @app.errorhandler(PersistenceError)
    def persistence_failed(error: PersistenceError) -> tuple[Response, int]:  # pyright: ignore[reportUnusedFunction]
        logger.error(f"❌ Request failed: {error.message}")
        return jsonify({"error": error.message}), _HTTP_SERVER_ERROR

    return app


def serve(store: TableStore, host: str = "0.0.0.0", port: int = 15332) -> None:  # pragma: no cover - blocks
    """Run the service until interrupted."""
    app = create_app(store)
    logger.info(f"🚀 Hostman service listening on {host}:{port}")
    app.run(host=host, port=port, threaded=True)
