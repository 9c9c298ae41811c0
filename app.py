"""
Book Print Costing - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (.env, COSTING_* production constants)
2. Builds the costing service from injected constants (fail-fast)
3. Loads the optional price table
4. Registers route blueprints and JSON error handlers

ARCHITECTURE:
    Main Thread
    ├── Configuration + CostingService construction
    └── Flask request handling

    Request Threads
    └── Share the one CostingService; it is stateless, so no locking

The costing engine performs no I/O. The only file read at startup is the
price table named by PRICE_TABLE_PATH.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from logging_config import setup_logging, get_logger
from core.exceptions import CostingConfigError
from models.costing import CostingConstants
from models.price_table import PriceTable
from services.costing_service import CostingService
from routes import register_blueprints


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def _get_base_path() -> Path:
    """
    Get the base path for the application.

    In a frozen bundle: Returns the directory containing the executable
    In development: Returns the directory containing app.py
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent


def create_app(config_object: str = "config.Config") -> Flask:
    """
    Application factory - creates and configures Flask app.

    FAIL-FAST: Invalid production constants or an unreadable price table
    stop the app from starting.

    Args:
        config_object: Import path of the configuration class

    Returns:
        Configured Flask application

    Raises:
        CostingConfigError: If constants or the price table are invalid
    """
    base_path = _get_base_path()
    env_file = base_path / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object)

    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting costing service in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # CORE INITIALIZATION (FAIL-FAST)
    # =========================================================================

    config_view = _ConfigView(app.config)
    try:
        constants = CostingConstants.from_config(config_view)
    except CostingConfigError as e:
        logger.error(f"FATAL: Cannot start application - {e}")
        raise

    app.config["COSTING_SERVICE"] = CostingService(constants)
    logger.info(
        f"Costing service ready: sheet {constants.sheet.width_mm:g}x"
        f"{constants.sheet.height_mm:g}mm, bleed {constants.sheet.bleed_mm:g}mm"
    )

    price_table_path = app.config.get("PRICE_TABLE_PATH")
    if price_table_path:
        app.config["PRICE_TABLE"] = PriceTable.load(price_table_path)
        logger.info(f"Price table loaded from {price_table_path}")
    else:
        app.config["PRICE_TABLE"] = None

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(404)
    def handle_not_found(e):
        return {"error": "Not found"}, 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return {"error": "Method not allowed"}, 405

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return {"error": "An unexpected error occurred"}, 500

    logger.info("Application initialized successfully")
    return app


class _ConfigView:
    """Attribute access over Flask's config mapping."""

    def __init__(self, config) -> None:
        self._config = config

    def __getattr__(self, name: str):
        try:
            return self._config[name]
        except KeyError:
            raise AttributeError(name) from None


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
