import logging

import certifi
from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from flask_pymongo import PyMongo
from pymongo.errors import PyMongoError

from params import InvalidParameter, ListingParams, MonthParams
from seed import SeedError, fetch_seed_records
from service import CombinedViewError, TransactionService
from settings import Settings


def select_collection(mongo, settings):
    """Collection from the URI's database, or MONGO_DB when the URI names none."""
    db = mongo.db
    if db is None:
        db = mongo.cx[settings.database_name]
    return db[settings.collection_name]


def _connect(app, settings):
    """Open the Flask-PyMongo client and return the transactions collection."""
    app.config["MONGO_URI"] = settings.mongo_uri
    app.config["MONGO_CONNECT"] = False
    options = {}
    if settings.mongo_uri.startswith("mongodb+srv://"):
        options["tlsCAFile"] = certifi.where()
    mongo = PyMongo(app, **options)
    app.extensions["mongo_client"] = mongo.cx
    return select_collection(mongo, settings)


def create_app(settings=None, collection=None):
    settings = settings or Settings.from_env()

    app = Flask(__name__)
    logging.basicConfig(level=settings.log_level)
    app.logger.setLevel(settings.log_level)
    app.config["SETTINGS"] = settings

    if collection is None:
        collection = _connect(app, settings)
    app.extensions["transactions"] = TransactionService(collection)

    CORS(app, origins=settings.cors_origins)

    register_error_handlers(app)
    register_routes(app)
    return app


def get_service():
    return current_app.extensions["transactions"]


# --- ERROR HANDLERS ---

def register_error_handlers(app):

    @app.errorhandler(InvalidParameter)
    def invalid_parameter(error):
        return jsonify({"error": str(error)}), 400

    @app.errorhandler(CombinedViewError)
    def combined_failed(error):
        app.logger.error("Combined view failed: %s", error)
        return jsonify({"error": "Failed to build combined view."}), 500

    @app.errorhandler(PyMongoError)
    def database_error(error):
        app.logger.exception("Database error: %s", error)
        return jsonify({"error": "Database unavailable."}), 503


# --- ROUTES ---

def register_routes(app):

    @app.route("/")
    def index():
        return "Transactions API running!"

    ## --- Seed ---
    @app.route("/api/initialize", methods=["GET"])
    def initialize():
        settings = current_app.config["SETTINGS"]
        try:
            records = fetch_seed_records(settings.seed_url, timeout=settings.seed_timeout)
            count = get_service().initialize(records)
        except (SeedError, PyMongoError):
            app.logger.exception("Failed to initialize database")
            return jsonify({"error": "Failed to initialize database."}), 500
        return jsonify({"message": "Database initialized with seed data.", "count": count})

    ## --- Listing ---
    @app.route("/api/transactions", methods=["GET"])
    def list_transactions():
        params = ListingParams.from_args(request.args)
        return jsonify(get_service().list_transactions(params))

    ## --- Dashboard ---
    @app.route("/api/statistics", methods=["GET"])
    def statistics():
        params = MonthParams.from_args(request.args)
        return jsonify(get_service().statistics(params.month))

    @app.route("/api/bar-chart", methods=["GET"])
    def bar_chart():
        params = MonthParams.from_args(request.args)
        return jsonify(get_service().bar_chart(params.month))

    @app.route("/api/pie-chart", methods=["GET"])
    def pie_chart():
        params = MonthParams.from_args(request.args)
        return jsonify(get_service().pie_chart(params.month))

    @app.route("/api/combined", methods=["GET"])
    def combined():
        params = MonthParams.from_args(request.args)
        return jsonify(get_service().combined(params.month))


if __name__ == "__main__":
    settings = Settings.from_env()
    app = create_app(settings)
    print(f"[INFO] Starting Flask app on http://{settings.host}:{settings.port} ...")
    try:
        app.run(host=settings.host, port=settings.port)
    finally:
        app.extensions["mongo_client"].close()
