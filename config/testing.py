import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "membership_test"),
}

COOKIE_KEY = "Admin"
REMEMBER_ME_DAYS = 365
AUTO_LOGIN = True
AUDIT_LOG_ENABLED = True

REGISTER_ROLE_ID = 0
REGISTER_ENABLED = True
ADMIN_ROLE_NAME = "Administrator"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
