"""
Global configuration settings for the Etymolens project.

This module contains all configuration constants used throughout the application.
Values that depend on the deployment (cache location, API endpoint, timeouts) can be
overridden through environment variables or a local .env file.
"""

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv

load_dotenv()

# Application Mode
DEBUG_MODE = os.getenv("ETYMOLENS_DEBUG", "false").lower() == "true"

# Directory Configuration
BASE_DIR = Path(__file__).parent.parent
CACHE_DIR = Path(os.getenv("ETYMOLENS_CACHE_DIR", str(BASE_DIR / "cache")))
LOG_DIR = BASE_DIR / "logs"

# External API Configuration
WIKTIONARY_API_URL = os.getenv("ETYMOLENS_API_URL", "https://en.wiktionary.org/w/api.php")

# Web Scraping Configuration
SCRAPING_CONFIG = {
    "timeout": float(os.getenv("ETYMOLENS_TIMEOUT", "10")),  # Request timeout in seconds
    "user_agent": os.getenv(
        "ETYMOLENS_USER_AGENT",
        "Etymolens/1.0 (word origin visualizer)"
    ),
}

# Cache Configuration
CACHE_CONFIG = {
    "file_name": "origin_cache.json",
    "cache_key": "etymologyCache",       # Key of the serialized word -> origin mapping
    "date_key": "etymologyCacheDate",    # Key of the last-active-date marker
}

# Resolver Configuration
RESOLVER_CONFIG = {
    "max_depth": 2,        # Deeper recursive calls resolve to Unknown
    "min_stem_length": 3,  # Morphological stems must keep more than 2 characters
}

# Logging Configuration
LOG_CONFIG = {
    "console_format": (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    ),
    "file_format": (
        "{time:YYYY-MM-DD HH:mm:ss} | "
        "{level: <8} | "
        "{name}:{function}:{line} | "
        "process:{process} | "
        "{message}"
    ),
    "rotation": "1 day",
    "retention": "30 days",
    "compression": "gz",
}

# Display colours per origin label
LANGUAGE_COLORS: Dict[str, str] = {
    "Old English": "#8B4513",
    "Latin": "#DC143C",
    "French": "#4169E1",
    "Old Norse": "#228B22",
    "Germanic": "#FF8C00",
    "Greek": "#9932CC",
    "Celtic": "#2E8B57",
    "Sanskrit": "#B8860B",
    "Dutch": "#FF4500",
    "Italian": "#8B008B",
    "Spanish": "#FF69B4",
    "Arabic": "#556B2F",
    "Unknown": "#808080",
}
