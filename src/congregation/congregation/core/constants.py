"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Tier -> minimum elapsed days (strictly exceeded) before a member is in that tier.
DEFAULT_LAPSE_THRESHOLDS = {
    1: 90,  # 3 months
    2: 182,  # 6 months
    3: 365,  # 1 year
    4: 730,  # 2 years
}

DEFAULT_ABSENT_SERVICE_WINDOW = 3
DEFAULT_RECENT_SERVICES_LIMIT = 10
DEFAULT_SMS_MAX_CONCURRENCY = 5
DEFAULT_SMS_TIMEOUT_SECONDS = 10
