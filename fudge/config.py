from pathlib import Path
from dotenv import load_dotenv
import os

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")  # переменные окружения из .env

APP_NAME = "Fudge!"
ENV = os.getenv("ENV", "local")

# Строка подключения к БД
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite:///{(BASE_DIR / 'fudge.db').as_posix()}"
)

# JWT
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_IN = os.getenv("JWT_EXPIRES_IN", "7d")

# bcrypt cost factor
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "14"))
# верхние границы: дальше БД не примет OFFSET/количество
MAX_PAGE = 1_000_000
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "100"))
MAX_QUANTITY = 2_147_483_647

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "1417"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Бутстрап администратора (см. fudge/seed.py)
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@fudge.local")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "change-me-please")
