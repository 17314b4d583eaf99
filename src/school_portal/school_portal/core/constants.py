"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

ISO_DATE_FORMAT = "%Y-%m-%d"

# Department bucket for posts made by the principal.
COMMON_NEWS_DEPARTMENT = "News"

DEFAULT_TOKEN_DAYS = 7
MIN_PASSWORD_LENGTH = 6
