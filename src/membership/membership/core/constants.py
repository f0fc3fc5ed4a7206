"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DEFAULT_COOKIE_KEY = "Admin"
FALLBACK_COOKIE_KEY = "cube_user"

DEFAULT_REMEMBER_ME_DAYS = 365
EXPIRED_COOKIE_DAYS = 365

DEFAULT_ADMIN_ROLE_NAME = "Administrator"
DEFAULT_LOG_LIMIT = 50

# Sub-field names inside the remember-me cookie value.
COOKIE_USER_FIELD = "u"
COOKIE_PASSWORD_FIELD = "p"
