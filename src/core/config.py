"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(os.environ.get("DB_PATH", PROJECT_ROOT / "data" / "db" / "booking-insights.db"))
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# EVENT STATUSES
# =============================================================================

STATUS_PENDING = "pending"
STATUS_UPCOMING = "upcoming"
STATUS_FINISHED = "finished"

# Workflow order, left to right
STATUS_ORDER = [STATUS_PENDING, STATUS_UPCOMING, STATUS_FINISHED]

# Older records were stored with "maybe" for the pending tab
STATUS_ALIASES = {"maybe": STATUS_PENDING}

# =============================================================================
# CALENDAR CONFIGURATION
# =============================================================================

VIEW_MONTHLY = "monthly"
VIEW_WEEKLY = "weekly"
VIEW_MODES = {VIEW_MONTHLY, VIEW_WEEKLY}

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
MAX_GRID_DAYS = 42  # 6 weeks

NOTE_COLORS = {"yellow", "blue", "green", "pink", "purple", "orange"}
DEFAULT_NOTE_COLOR = "yellow"

# =============================================================================
# DATE RANGE PRESETS
# =============================================================================

PRESETS = ["last30days", "last90days", "thisMonth", "lastMonth", "thisYear", "allTime", "custom"]
DEFAULT_PRESET = os.environ.get("DEFAULT_PRESET", "last90days")

# =============================================================================
# ANALYTICS CONFIGURATION
# =============================================================================

UNKNOWN_VENUE = "Unknown"
UNNAMED_CLIENT = "Unnamed Client"
UNTITLED_EVENT = "Untitled Event"

HIGH_VALUE_MULTIPLIER = float(os.environ.get("HIGH_VALUE_MULTIPLIER", "1.35"))
HIGH_VALUE_FLOOR = float(os.environ.get("HIGH_VALUE_FLOOR", "5000"))
TOP_N = int(os.environ.get("TOP_N", "4"))

# Amounts larger than this (either sign) are data-entry errors and count as 0
MAX_AMOUNT = 1e12

MONEY_FIELDS = [
    "priceGiven",
    "downPaymentRequired",
    "downPaymentReceived",
    "amountDueAfter",
    "amountPaidAfter",
    "grandTotal",
    "securityDeposit",
]

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

SUMMARY_HEADERS = ["Metric", "Value"]
MONTHLY_HEADERS = ["Month", "Events", "Revenue"]
CLIENT_HEADERS = ["Client", "Bookings", "Revenue"]

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
