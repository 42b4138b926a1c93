import logging

from flask import Flask, jsonify

from .config import Config, check_config, configure_logging
from .controllers.rentals import bp as rentals_bp
from .controllers.vehicles import bp as vehicles_bp
from .controllers.views import bp as views_bp
from .exceptions import VehicleNotFoundError, CustomerNotFoundError
from .models.ledger import Ledger
from .seeds import seed_demo_catalog
from .services.common import LEDGER_EXTENSION

logger = logging.getLogger(__name__)


def _not_found(e):
    return jsonify(ok=False, message=e.message), 404


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.update(Config().as_dict())
    if overrides:
        app.config.update(overrides)
    check_config(app.config)
    configure_logging(app.config["LOG_LEVEL"])

    ledger = Ledger(tz_name=app.config["RENTAL_TIMEZONE"])
    app.extensions[LEDGER_EXTENSION] = ledger
    if app.config["SEED_DEMO_CATALOG"]:
        seed_demo_catalog(ledger)

    app.register_blueprint(views_bp)
    app.register_blueprint(vehicles_bp)
    app.register_blueprint(rentals_bp)
    app.register_error_handler(VehicleNotFoundError, _not_found)
    app.register_error_handler(CustomerNotFoundError, _not_found)

    logger.info("Rental app ready (%s, tz=%s, %d vehicles)",
                app.config["APP_ENV"], ledger.tz_name, len(ledger.vehicles))
    return app
