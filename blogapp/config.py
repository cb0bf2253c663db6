# =============================================================================
# File: blogapp/config.py
# Purpose: Static configuration read from the environment (.env supported).
# =============================================================================
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

from dotenv import load_dotenv

APP_DIR = Path(__file__).resolve().parent
MESSAGES_DIR = APP_DIR / "messages"


def load_config() -> Dict[str, Any]:
    """Build the Flask config mapping from environment variables."""
    # Load environment variables from .env file
    load_dotenv()

    return {
        "BASE_URL": os.getenv("BASE_URL", "http://localhost:3000"),
        "DATABASE_URL": os.getenv("DATABASE_URL", "sqlite:///blog.db3"),
        "MESSAGES_DIR": os.getenv("MESSAGES_DIR", str(MESSAGES_DIR)),
        "DEFAULT_LANGUAGE": os.getenv("DEFAULT_LANGUAGE", "en"),
        "ADMIN_EMAIL": os.getenv("ADMIN_EMAIL", "admin@example.com"),
        # Request body ceiling, enforced by Werkzeug (413)
        "MAX_CONTENT_LENGTH": int(os.getenv("MAX_CONTENT_LENGTH", 2 * 1024 * 1024)),
        "SECRET_KEY": os.getenv("SECRET_KEY", "dev-not-secret"),
        "PORT": int(os.getenv("PORT", 3000)),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO"),
    }
