"""Constants shared across the client."""

VERSION = "0.1.0"

DEFAULT_USER_AGENT = f"pyflickr/{VERSION} (python-httpx)"

# Every API method lives under this namespace
METHOD_PREFIX = "flickr."

# Token store key for the current OAuth token
TOKEN_SERVICE_NAME = "Flickr"

# Single key of the wrapper object the API uses for text values
TEXT_NODE_KEY = "_content"

STATUS_FIELD = "stat"
