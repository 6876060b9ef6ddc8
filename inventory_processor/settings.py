import os
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# --- Path Configuration ---
INPUT_DIR = BASE_DIR / os.getenv("INPUT_DIR", "input")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")

# --- Filename Configuration ---
INVENTORY_FILENAME = os.getenv("INVENTORY_FILENAME", "inventory.csv")
INVENTORY_FILE = INPUT_DIR / INVENTORY_FILENAME
REPORT_FILENAME_BASE = os.getenv("REPORT_FILENAME_BASE", "inventory_report")
SAVE_JSON_OUTPUT = _get_bool("SAVE_JSON_OUTPUT")

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Discount Lookup (timeout -> retry -> fallback) ---
DISCOUNT_TIMEOUT_SECONDS = int(os.getenv("DISCOUNT_TIMEOUT_MS", "100")) / 1000
DISCOUNT_MAX_RETRIES = int(os.getenv("DISCOUNT_MAX_RETRIES", "3"))
DISCOUNT_RETRY_DELAY_SECONDS = int(os.getenv("DISCOUNT_RETRY_DELAY_MS", "0")) / 1000
DISCOUNT_FALLBACK = Decimal(os.getenv("DISCOUNT_FALLBACK", "1.0"))
# Simulated latency of the upstream discount lookup.
DISCOUNT_LATENCY_SECONDS = int(os.getenv("DISCOUNT_LATENCY_MS", "50")) / 1000

# --- Shared Business Logic ---
DISCOUNT_NAME_PREFIX = os.getenv("DISCOUNT_NAME_PREFIX", "A")
OUTDATED_CATEGORY = os.getenv("OUTDATED_CATEGORY", "Peripherals")
OUTDATED_THRESHOLD_DAYS = int(os.getenv("OUTDATED_THRESHOLD_DAYS", "90"))
