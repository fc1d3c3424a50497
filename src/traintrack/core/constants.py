"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

API_TOKEN_BYTES = 32
ID_RANDOM_BYTES = 8
TRAINEE_CODE_LENGTH = 8
DEFAULT_PUBLIC_BASE_URL = "http://localhost:5000/"
CHART_TITLE_MAX_LENGTH = 15

ID_PREFIX_USER = "u"
ID_PREFIX_WORKSPACE = "ws"
ID_PREFIX_TRAINING = "t"
ID_PREFIX_TRAINEE = "tr"
ID_PREFIX_ATTENDANCE = "att"
