"""
Configuration for the book print costing service.

Production-process constants (press sheet, bleed, discount curve) are read
from the environment here and injected into the costing engine through
CostingConstants.from_config(). The engine itself never reads os.environ.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Press Sheet Configuration
    # ==========================================================================
    # SRA3 press sheet the finished pages are imposed on, in millimeters.
    # COSTING_BLEED_MM is added to BOTH width and height of the finished page
    # before fitting it on the sheet.
    # ==========================================================================
    COSTING_SHEET_WIDTH_MM = float(os.environ.get("COSTING_SHEET_WIDTH_MM", "320"))
    COSTING_SHEET_HEIGHT_MM = float(os.environ.get("COSTING_SHEET_HEIGHT_MM", "450"))
    COSTING_BLEED_MM = float(os.environ.get("COSTING_BLEED_MM", "6"))

    # ==========================================================================
    # Discount Curve Configuration
    # ==========================================================================
    # Prices fall from `max` at quantity 1 to `min` at the saturation quantity.
    #
    # COSTING_BATCH_SATURATION: saturation for block (offset) production
    # COSTING_CONTINUOUS_SATURATION: saturation for per-copy (digital) production
    # COSTING_GAMMA: exponent of the gamma-exponential curve
    #
    # Formula: price = max - (max - min) * progress ** gamma
    # ==========================================================================
    COSTING_BATCH_SATURATION = int(os.environ.get("COSTING_BATCH_SATURATION", "1000"))
    COSTING_CONTINUOUS_SATURATION = int(
        os.environ.get("COSTING_CONTINUOUS_SATURATION", "3000")
    )
    COSTING_GAMMA = float(os.environ.get("COSTING_GAMMA", "0.675"))

    # Minimum per-copy price in cents (continuous production only)
    COSTING_PRICE_FLOOR = float(os.environ.get("COSTING_PRICE_FLOOR", "200"))

    # Markup percentage range used when a request does not carry its own
    COSTING_MARKUP_MIN = float(os.environ.get("COSTING_MARKUP_MIN", "75"))
    COSTING_MARKUP_MAX = float(os.environ.get("COSTING_MARKUP_MAX", "200"))

    # Optional JSON price table: {"fixed": {"min", "max"}, "classes": {"B": {...}, ...}}
    PRICE_TABLE_PATH = os.environ.get("PRICE_TABLE_PATH", "")


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    ENVIRONMENT = "testing"
    PRICE_TABLE_PATH = ""
