"""
Configuration for PrintStudio.

The cart snapshot lives in STORAGE_DIR as one JSON file per storage key.
TestingConfig swaps the file storage for an in-memory one.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
load_dotenv(override=True)

# Base directory (where this file lives)
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB image uploads
    SESSION_COOKIE_NAME = "print_studio_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Cart storage
    # ==========================================================================
    # STORAGE_BACKEND: "file" (JSON files in STORAGE_DIR) or "memory"
    # CART_STORAGE_NAME: key of the cart/order snapshot inside the storage
    # ==========================================================================
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "file")
    STORAGE_DIR = os.environ.get("STORAGE_DIR", str(BASE_DIR / "storage"))
    CART_STORAGE_NAME = os.environ.get("CART_STORAGE_NAME", "cart-storage")

    # ==========================================================================
    # Orders
    # ==========================================================================
    # ORDER_COMPLETION_DAYS: offset added to creation time for the estimate
    # ENFORCE_STATUS_TRANSITIONS: reject status changes outside the lifecycle
    #   pending -> processing -> ready -> completed (cancelled from any
    #   non-terminal state). Off by default: any status may follow any other.
    # ==========================================================================
    ORDER_COMPLETION_DAYS = int(os.environ.get("ORDER_COMPLETION_DAYS", "3"))
    ENFORCE_STATUS_TRANSITIONS = (
        os.environ.get("ENFORCE_STATUS_TRANSITIONS", "0") == "1"
    )

    # ==========================================================================
    # AI image demo
    # ==========================================================================
    # The image helper is a simulation. The delay is cosmetic and the success
    # rate mimics an unreliable free-tier service.
    # ==========================================================================
    AI_SIMULATED_DELAY_SECONDS = float(
        os.environ.get("AI_SIMULATED_DELAY_SECONDS", "2.0")
    )
    AI_SUCCESS_RATE = float(os.environ.get("AI_SUCCESS_RATE", "0.7"))

    # UI language for user-facing messages
    DEFAULT_LANGUAGE = os.environ.get("DEFAULT_LANGUAGE", "ru")


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    STORAGE_BACKEND = "memory"
    AI_SIMULATED_DELAY_SECONDS = 0.0
    AI_SUCCESS_RATE = 1.0
