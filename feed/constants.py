"""Constants used throughout the notification feed service."""

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"
MAX_REQUEST_ID_LENGTH = 128

# Performance Thresholds
SLOW_REQUEST_THRESHOLD = 1.0  # Log requests slower than 1 second

# Security Headers
SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'self'",
}

# Legacy candidate ids are "<marker><row id>"; structured ids are bare UUIDs
LEGACY_LIKE_ID_PREFIX = "like_"
LEGACY_FOLLOW_ID_PREFIX = "follow_"

# Dismissal overlay storage
DISMISSAL_CACHE_ALIAS = "dismissals"
DISMISSAL_CACHE_KEY_PREFIX = "dismissed_notifications:"

# Collector row caps
DEFAULT_LEGACY_FETCH_LIMIT = 50
DEFAULT_STRUCTURED_FETCH_LIMIT = 100

# Swipe-to-delete gesture
DEFAULT_SWIPE_ACTIVATION_OFFSET = 10.0  # px of rightward drag before a gesture starts
DEFAULT_SWIPE_COMMIT_RATIO = 0.3  # fraction of the viewport width
