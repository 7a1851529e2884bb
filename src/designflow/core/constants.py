"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_VARIATION_POINTS = 5
DEFAULT_USER_PASSWORD = "123"
DEFAULT_TIMEZONE = "America/Sao_Paulo"
SETTINGS_ROW_ID = 1
MS_PER_DAY = 86_400_000
