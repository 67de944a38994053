# carerecords/config.py
import os

# --- Locations ---
# The base directory is the only externally configurable location.
BASE_DIR = os.getenv("CARERECORDS_BASE_DIR", os.getcwd())
DATA_DIRNAME = os.getenv("CARERECORDS_DATA_DIRNAME", "data")
OUTPUT_DIRNAME = os.getenv("CARERECORDS_OUTPUT_DIRNAME", "output")

# --- CSV codec ---
# 1 = strip whitespace inside quoted fields too (legacy file behaviour)
TRIM_QUOTED = os.getenv("CARERECORDS_TRIM_QUOTED", "1").strip() != "0"

# --- Referral workflow ---
STRICT_STATUS = os.getenv("CARERECORDS_STRICT_STATUS", "0").strip() == "1"

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Formats ---
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
AUDIT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LETTER_FILENAME_TIMESTAMP = "%Y%m%d_%H%M%S"
LETTER_FOOTER_TIMESTAMP = "%d/%m/%Y %H:%M:%S"
