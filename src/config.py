from dotenv import load_dotenv
import os

load_dotenv()

DB_HOST = os.environ.get("DB_HOST", "localhost")
DB_PORT = os.environ.get("DB_PORT", "5432")
DB_NAME = os.environ.get("DB_NAME", "cost_management")
DB_USER = os.environ.get("DB_USER", "postgres")
DB_PASS = os.environ.get("DB_PASS", "postgres")

DATABASE_URL = os.environ.get(
    "DATABASE_URL",
    f"postgresql+asyncpg://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

SYSTEM_ADMIN = os.environ.get("SYSTEM_ADMIN")
SYSTEM_ADMIN_PASSWORD = os.environ.get("SYSTEM_ADMIN_PASSWORD")

LOG_FILE = os.environ.get("LOG_FILE")

# Business policy
MONTHLY_HOURS = int(os.environ.get("MONTHLY_HOURS", 160))
VACATION_DAY_HOURS = int(os.environ.get("VACATION_DAY_HOURS", 8))
DEFAULT_DAILY_HOURS = int(os.environ.get("DEFAULT_DAILY_HOURS", 8))
PROJECTION_MONTHS = int(os.environ.get("PROJECTION_MONTHS", 12))

# Reverse proxies allowed to set X-Forwarded-For
TRUSTED_PROXIES = [p.strip() for p in os.environ.get("TRUSTED_PROXIES", "127.0.0.1").split(",") if p.strip()]
