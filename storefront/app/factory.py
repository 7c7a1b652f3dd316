from __future__ import annotations

from flask import Flask, jsonify, render_template, request
from werkzeug.exceptions import HTTPException

from storefront.app.api.register import register_api_blueprints
from storefront.app.common.errors import ApiError, error_payload
from storefront.app.common.log import configure_logging
from storefront.app.common.request_context import current_request_id, init_request_id
from storefront.app.config import Config
from storefront.app.extensions import cors, cosmic
from storefront.app.ui import ui_bp


def _wants_json() -> bool:
    return request.path == "/api" or request.path.startswith("/api/")


def create_app(config_object: type[Config] = Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)

    configure_logging(app)

    # Extensions
    cosmic.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})

    # Request id
    @app.before_request
    def _before_request():
        init_request_id()

    @app.after_request
    def _after_request(response):
        rid = current_request_id()
        if rid:
            response.headers["X-Request-ID"] = rid
        return response

    @app.context_processor
    def inject_layout():
        return {"site_name": "E-Commerce Store"}

    # Health endpoint
    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    register_api_blueprints(app)
    app.register_blueprint(ui_bp)

    # Error handlers
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        return jsonify(err.to_dict(current_request_id())), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = err.code or 500
        if _wants_json():
            payload = error_payload("http_error", err.description, {"name": err.name}, current_request_id())
            return jsonify(payload), status
        if status == 404:
            return render_template("pages/404.html"), 404
        return render_template("pages/error.html", status=status, title=err.name), status

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception")
        if _wants_json():
            return jsonify(error_payload("internal_error", "Internal server error", None, current_request_id())), 500
        return render_template("pages/error.html", status=500, title="Something went wrong"), 500

    return app
