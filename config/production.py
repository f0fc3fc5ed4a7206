import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "membership_db"),
}

COOKIE_KEY = os.getenv("COOKIE_KEY", "Admin")
REMEMBER_ME_DAYS = int(os.getenv("REMEMBER_ME_DAYS", "365"))
AUTO_LOGIN = bool(int(os.getenv("AUTO_LOGIN", "1")))
AUDIT_LOG_ENABLED = bool(int(os.getenv("AUDIT_LOG_ENABLED", "1")))

REGISTER_ROLE_ID = int(os.getenv("REGISTER_ROLE_ID", "0"))
REGISTER_ENABLED = bool(int(os.getenv("REGISTER_ENABLED", "0")))
ADMIN_ROLE_NAME = os.getenv("ADMIN_ROLE_NAME", "Administrator")

DEBUG = False
SESSION_COOKIE_SECURE = bool(int(os.getenv("SESSION_COOKIE_SECURE", "1")))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
