"""Application settings."""

import os
from pathlib import Path

# Logging
LOG_DIR = Path(os.getenv("TRAVEL_LOG_DIR", "logs"))

# Cache
CACHE_MAX_SIZE = int(os.getenv("TRAVEL_CACHE_MAX_SIZE", "50"))
CACHE_TTL = float(os.getenv("TRAVEL_CACHE_TTL", "300"))
CACHE_MIN_TTL = 1.0

# Statistics
DEFAULT_PRECISION = 1
MIN_RATING = 0
MAX_RATING = 5

# Rankings
TOP_COUNTRY_LIMIT = 3
TOP_PURPOSE_LIMIT = 3
TOP_PURPOSE_THRESHOLD = 5
