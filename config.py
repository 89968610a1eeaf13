"""
AuctionFinder Configuration
Loads settings from environment variables and defines constants.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base directory (where this script lives)
BASE_DIR = Path(__file__).parent.resolve()

# eBay UK search endpoint
EBAY_SEARCH_URL = os.getenv("EBAY_SEARCH_URL", "http://search.ebay.co.uk/search/search.dll")

# Debug tiers: 0 = quiet, 1 = trace rows/links, 2 = also dump raw page markup
DEBUG_NONE = 0
DEBUG_TRACE = 1
DEBUG_DUMP = 2
SEARCH_DEBUG = int(os.getenv("SEARCH_DEBUG", "0"))

# Paging
MAX_PAGES = int(os.getenv("MAX_PAGES", "20"))

# Timing
REQUEST_TIMEOUT_SECONDS = int(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
REQUEST_DELAY_SECONDS = float(os.getenv("REQUEST_DELAY_SECONDS", "1.0"))
CHECK_INTERVAL_SECONDS = int(os.getenv("CHECK_INTERVAL_SECONDS", "300"))
RETENTION_DAYS = int(os.getenv("RETENTION_DAYS", "14"))

# File paths
DATABASE_FILE = BASE_DIR / os.getenv("DATABASE_FILE", "auctionfinder.db")
LOG_FILE = BASE_DIR / os.getenv("LOG_FILE", "auctionfinder.log")

# Default queries for monitor mode
SEARCH_TERMS = [
    term.strip()
    for term in os.getenv("SEARCH_TERMS", "pocket watch,fountain pen").split(",")
    if term.strip()
]

# User agent for requests
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
