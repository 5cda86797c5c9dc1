# API Constants
GITHUB_API_URL = "https://api.github.com"
DEFAULT_REF = "master"
USER_AGENT = "gitfs/1.0"

# Commit Message Constants
COMMIT_MESSAGE_TEMPLATE = "Saved via {identifier}"
FALLBACK_IDENTIFIER = "Hacklily"

# Status Codes
STATUS_OK = 200
STATUS_CREATED = 201
STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409

# Log Sanitizing
TOKEN_PATTERNS = (
    r"ghp_\w+",
    r"gho_\w+",
    r"Bearer\s+[\w.-]+",
    r"token\s+[\w.-]+",
)
MAX_LOG_LENGTH = 500

VALID_URL_SCHEMES = ("http", "https")
