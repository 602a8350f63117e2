# File: src/core/config_manager.py
"""
Centralized configuration management for Courtside Scheduler.
Loads settings from environment variables and config files.
"""

import os
import json
from pathlib import Path
from typing import Any, Dict
from dotenv import load_dotenv

from src.models.config import EngineSettings
from src.utils.logger import setup_logger

# Load environment variables
load_dotenv()

logger = setup_logger(__name__)


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from src/core/

    # Subdirectories
    CONFIG_DIR = BASE_DIR / "config"
    LOGS_DIR = BASE_DIR / "logs"
    SRC_DIR = BASE_DIR / "src"

    # Files
    ENGINE_CONFIG_FILE = CONFIG_DIR / "engine.json"
    ENV_FILE = BASE_DIR / ".env"

    # Hosted store (PostgREST)
    SUPABASE_URL = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY = os.getenv("SUPABASE_KEY", os.getenv("SUPABASE_ANON_KEY", ""))
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))

    AVAILABILITY_TABLE = "user_availability"
    BOOKINGS_TABLE = "match_bookings"
    PROFILES_TABLE = "profiles"

    # Application Settings
    TARGET_TIMEZONE = os.getenv("TIMEZONE", "UTC")

    @classmethod
    def load_engine_settings(cls, path: Path = None) -> EngineSettings:
        """
        Load engine settings from JSON, falling back to defaults.

        Environment overrides (SEARCH_STEP_MINUTES, MAX_SUGGESTIONS) win
        over the file; TIMEZONE fills in when the file does not set one.
        """
        path = path or cls.ENGINE_CONFIG_FILE
        data: Dict[str, Any] = {}

        if path.exists():
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            logger.debug(f"Loaded engine settings from {path}")
        else:
            logger.debug(f"No engine config at {path}, using defaults")

        data.setdefault('timezone', cls.TARGET_TIMEZONE)

        step = os.getenv("SEARCH_STEP_MINUTES")
        if step:
            data['search_step_minutes'] = int(step)
        cap = os.getenv("MAX_SUGGESTIONS")
        if cap:
            data['max_suggestions'] = int(cap)

        return EngineSettings.from_dict(data)

    @classmethod
    def validate(cls) -> bool:
        """Validate that all required configuration is present."""
        errors = []

        if not cls.SUPABASE_URL:
            errors.append("SUPABASE_URL not set")

        if not cls.SUPABASE_KEY:
            errors.append("SUPABASE_KEY not set")

        if errors:
            for error in errors:
                logger.error(f"Configuration Error: {error}")
            return False

        return True
