"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"
MAX_REPORT_DAYS = 366
DEFAULT_EXPORT_LOCALE = "en"
SUPPORTED_LOCALES = ("en", "ar")
