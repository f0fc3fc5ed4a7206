import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "membership_db"),
}

# Session entry and remember-me cookie name
COOKIE_KEY = os.getenv("COOKIE_KEY", "Admin")
REMEMBER_ME_DAYS = int(os.getenv("REMEMBER_ME_DAYS", "365"))
# Restore users from the remember-me cookie (records a login + audit entry)
AUTO_LOGIN = bool(int(os.getenv("AUTO_LOGIN", "1")))
# Persist audit entries to the logs table (they are always written to the logger)
AUDIT_LOG_ENABLED = bool(int(os.getenv("AUDIT_LOG_ENABLED", "1")))

# Self-service registration
REGISTER_ROLE_ID = int(os.getenv("REGISTER_ROLE_ID", "0"))
REGISTER_ENABLED = bool(int(os.getenv("REGISTER_ENABLED", "1")))
ADMIN_ROLE_NAME = os.getenv("ADMIN_ROLE_NAME", "Administrator")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the admin account on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
