"""Constants for the AniList fetch layer."""

ANILIST_API_URL = "https://graphql.anilist.co"

# Name of the user list that holds finished entries
DEFAULT_LIST_NAME = "Completed"
DEFAULT_MEDIA_TYPE = "MANGA"

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "anchorscore/0.1.0"

# HTTP Status Code Ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_TOO_MANY_REQUESTS = 429
HTTP_STATUS_SERVER_ERROR_MIN = 500
HTTP_STATUS_SERVER_ERROR_MAX = 600

# Maximum retry delay cap for rate limiting (seconds)
MAX_RETRY_AFTER_SECONDS = 60
