'''
    File Name: config.py
    Version: 3.0.0
    Date: 12/01/2026
    Author: Pablo Bartolomé Molina
'''

from pathlib import Path
import logging
import os

# Project paths & files
BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
DB_FILENAME = "finance.db"
DATABASE_PATH = Path(os.getenv("FINANCE_TRACKER_DB") or DATA_DIR / DB_FILENAME)

# App metadata
APP_NAME = "Finance Tracker"
APP_VERSION = "3.0.0"

# Formatting
DEFAULT_CURRENCY = "USD"
DATE_FORMAT = "%Y-%m-%d"

# Closed list offered by the add/edit path. The read path accepts any string.
DEFAULT_CATEGORIES = [
    "Salary",
    "Freelance",
    "Investment",
    "Food",
    "Transport",
    "Entertainment",
    "Utilities",
    "Healthcare",
    "Shopping",
    "Other",
]
DEFAULT_CATEGORY = "Other"

# Dashboard
RECENT_LIMIT = 5
CHART_COLORS = ["#5B4FD9", "#8B7FFF", "#A89FFF", "#C8BFFF", "#E8E0FF"]
INCOME_COLOR = "#10b981"
EXPENSE_COLOR = "#ef4444"

# Logging (entry points call logging.basicConfig(**LOGGING_CONFIG))
LOGGING_CONFIG = {
    "level": os.getenv("FINANCE_TRACKER_LOG_LEVEL", "WARNING").upper(),
    "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
}


# Helpers
def ensure_data_dir():
    """
    Ensure the data directory exists. Database creation should be handled
    by the database manager (see `database.db_manager.DatabaseManager`).
    """
    DATA_DIR.mkdir(parents=True, exist_ok=True)
