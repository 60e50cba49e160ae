
from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

# project paths
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
DATA_DIR   = Path(os.getenv("OSGB_DATA_DIR", BASE_DIR / "data"))
RAW_DIR    = DATA_DIR / "raw"
CLEAN_DIR  = DATA_DIR / "cleaned"
LOGS_DIR   = DATA_DIR / "logs"

# input files (exports of the application database)
COMPANIES_FILE  = RAW_DIR / "companies.csv"
SCREENINGS_FILE = RAW_DIR / "screenings.csv"
DOCUMENTS_FILE  = RAW_DIR / "documents.csv"

# output files
COMPANIES_CLEAN  = CLEAN_DIR / "companies_clean.csv"
SCREENINGS_CLEAN = CLEAN_DIR / "screenings_clean.csv"
DOCUMENTS_CLEAN  = CLEAN_DIR / "documents_clean.csv"

# logs
SCREENINGS_LOGS = LOGS_DIR / "screenings_logs.csv"
DOCUMENTS_LOGS  = LOGS_DIR / "documents_logs.csv"

# analytics tunables
EXPIRY_WARNING_DAYS   = int(os.getenv("EXPIRY_WARNING_DAYS", "30"))
MONTHLY_TARGET        = int(os.getenv("MONTHLY_TARGET", "50"))
NO_SHOW_ALERT_PERCENT = float(os.getenv("NO_SHOW_ALERT_PERCENT", "15"))
RECENT_UPLOAD_DAYS    = int(os.getenv("RECENT_UPLOAD_DAYS", "7"))
# informational only: dates are compared as naive local calendar dates
TIMEZONE = os.getenv("TIMEZONE", "Europe/Istanbul")

# Database
DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME")

_db_parts = [DB_USER, DB_PASSWORD, DB_NAME]
if any(_db_parts) and not all(_db_parts):
    raise ValueError("Missing required DB environment variables")

if os.getenv("DATABASE_URL"):
    DATABASE_URL = os.environ["DATABASE_URL"]
elif all(_db_parts):
    DATABASE_URL = f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
else:
    DATABASE_URL = f"sqlite:///{DATA_DIR / 'osgb.db'}"
