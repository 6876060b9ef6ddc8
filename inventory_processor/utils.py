import logging
from datetime import datetime
from pathlib import Path
import pandas as pd

logger = logging.getLogger(__name__)


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def format_currency(amount) -> str:
    """Formats an amount as dollars with thousands separators, e.g. '$1,234.50'."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_date(value: datetime | None) -> str:
    """Short date (MM/DD/YYYY), or 'N/A' when missing."""
    return value.strftime("%m/%d/%Y") if value else "N/A"


def load_csv(file_path: Path, skiprows: int = 0, dtype=str) -> pd.DataFrame | None:
    """
    A CSV loader with a multi-stage encoding fallback.
    It will attempt to read a file in the following order:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which reads any byte but might misinterpret characters.
    Columns are read as strings by default so values reach validation unaltered.
    """
    try:
        return pd.read_csv(
            file_path, encoding="utf-8-sig", skiprows=skiprows, dtype=dtype
        )

    except UnicodeDecodeError:
        logger.info(
            f"INFO: UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        try:
            return pd.read_csv(
                file_path, encoding="latin-1", skiprows=skiprows, dtype=dtype
            )
        except Exception as e_latin1:
            logger.error(
                f"ERROR: Could not read {file_path.name} even with latin-1. Reason: {e_latin1}"
            )
            return None

    except FileNotFoundError:
        logger.info(f"INFO: File not found at {file_path}, skipping.")
        return None

    except Exception as e_general:
        logger.error(
            f"ERROR: An unexpected error occurred while reading {file_path.name}. Reason: {e_general}"
        )
        return None
