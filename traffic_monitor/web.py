"""Flask application serving the traffic dashboard API."""

import logging
import os

from flask import Flask, abort, jsonify, request, send_from_directory

from traffic_monitor.bytes_reader import ByteCounterReader
from traffic_monitor.config import Config, load_config
from traffic_monitor.ignore_store import IgnoredDomainStore, ValidationError
from traffic_monitor.query import LogQueryEngine
from traffic_monitor.resolver import LogFileResolver
from traffic_monitor.validator import DomainPayloadValidator

logger = logging.getLogger(__name__)


def create_app(config: Config | None = None) -> Flask:
    """Flask application factory."""
    if config is None:
        config = load_config()

    app = Flask(__name__, static_folder=None)

    resolver = LogFileResolver(config.log_file, tz=config.timezone)
    engine = LogQueryEngine(resolver)
    ignore_store = IgnoredDomainStore(config.ignore_file)
    byte_reader = ByteCounterReader(config.bytes_file)
    validator = DomainPayloadValidator()

    # Store components on app for access in tests
    app.config["components"] = {
        "config": config,
        "resolver": resolver,
        "engine": engine,
        "ignore_store": ignore_store,
        "byte_reader": byte_reader,
        "validator": validator,
    }

    # --- API routes ---

    @app.route("/health")
    def health():
        return jsonify({
            "status": "ok",
            "log_file": config.log_file,
        })

    @app.route("/logs")
    def logs():
        result = engine.query(
            day=request.args.get("date"),
            client=request.args.get("client"),
            limit=request.args.get("limit"),
        )
        return jsonify(result.to_dict())

    @app.route("/log-days")
    def log_days():
        return jsonify({"days": resolver.available_days(config.lookback_days)})

    @app.route("/bytes")
    def bytes_counters():
        return jsonify(byte_reader.read())

    @app.route("/clients")
    def clients():
        return jsonify({"clients": byte_reader.clients()})

    @app.route("/ignored-domains", methods=["GET"])
    def get_ignored_domains():
        return jsonify({"domains": ignore_store.list()})

    def _invalid(errors):
        return jsonify({"error": "invalid domain", "errors": errors}), 400

    def _mutate(operation, payload):
        is_valid, errors = validator.validate(payload)
        if not is_valid:
            return _invalid(errors)
        try:
            domains = operation(payload["domain"])
        except ValidationError as exc:
            return _invalid([str(exc)])
        return jsonify({"domains": domains})

    @app.route("/ignored-domains", methods=["POST"])
    def add_ignored_domain():
        return _mutate(ignore_store.add, request.get_json(force=True, silent=True))

    @app.route("/ignored-domains", methods=["DELETE"])
    def remove_ignored_domain():
        if "domain" in request.args:
            payload = {"domain": request.args["domain"]}
        else:
            payload = request.get_json(force=True, silent=True)
        return _mutate(ignore_store.remove, payload)

    # --- Dashboard static files ---

    @app.route("/", defaults={"filename": "index.html"})
    @app.route("/<path:filename>")
    def dashboard(filename):
        if not os.path.isdir(config.web_dir):
            abort(404)
        return send_from_directory(config.web_dir, filename)

    return app
