import os
from pathlib import Path
from dotenv import load_dotenv

# Tests point DATABASE_URL at a temporary SQLite file; set DISABLE_DOTENV=1 so a
# developer's backend/.env can't override it.
if os.getenv("DISABLE_DOTENV") != "1":
    load_dotenv(override=True)


def _env_flag(name: str, default: str = "0") -> bool:
    return (os.getenv(name, default) or default).strip() in {"1", "true", "True", "yes", "YES"}


_raw_database_url = (os.getenv("DATABASE_URL") or "").strip()
# Absolute path so the DB file doesn't move with the current working directory.
_default_sqlite_path = (Path(__file__).resolve().parent.parent / "quickgig.db").as_posix()
DATABASE_URL = _raw_database_url or f"sqlite:///{_default_sqlite_path}"

# Foreign keys are declared on every table but SQLite only enforces them with this
# pragma. Off by default: admin deletes leave dangling references.
SQLITE_FOREIGN_KEYS = _env_flag("SQLITE_FOREIGN_KEYS", "0")

# -------------------- Bootstrap admin --------------------
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@quickgig.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
ADMIN_NAME = os.getenv("ADMIN_NAME", "System Admin")

# -------------------- Server --------------------
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000") or "3000")
LOG_LEVEL = (os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper()

# Built SPA (e.g. frontend/dist). Served at "/" when the directory exists.
FRONTEND_DIST_DIR = (os.getenv("FRONTEND_DIST_DIR") or "").strip()
