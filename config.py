import os
from dotenv import load_dotenv

load_dotenv()

def _as_bool(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")

class Config:
    API_ID = int(os.getenv("API_ID", "0"))
    API_HASH = os.getenv("API_HASH", "")
    BOT_TOKEN = os.getenv("BOT_TOKEN", "")

    # Identities
    OWNER_ID = int(os.getenv("OWNER_ID", "0"))

    # Shared secret for /auth
    BOT_PASSWORD = os.getenv("BOT_PASSWORD", "")

    # Sonarr
    SONARR_HOST = os.getenv("SONARR_HOST", "localhost")
    SONARR_PORT = int(os.getenv("SONARR_PORT", "8989"))
    SONARR_APIKEY = os.getenv("SONARR_APIKEY", "")
    SONARR_URLBASE = os.getenv("SONARR_URLBASE", "")
    SONARR_SSL = _as_bool(os.getenv("SONARR_SSL", "false"))
    SONARR_USERNAME = os.getenv("SONARR_USERNAME") or None
    SONARR_PASSWORD = os.getenv("SONARR_PASSWORD") or None

    # Cap on search candidates shown (0 = no cap)
    MAX_RESULTS = int(os.getenv("MAX_RESULTS", "0"))

    # Conversation sessions expire after this many seconds (0 = never)
    SESSION_TTL = int(os.getenv("SESSION_TTL", "900"))

    # ACL storage: MongoDB if MONGO_URI is set, JSON file otherwise
    ACL_FILE = os.getenv("ACL_FILE", "acl.json")
    MONGO_URI = os.getenv("MONGO_URI", "")

    LOG_FILE = os.getenv("LOG_FILE", "")

    # Bot Version
    BOT_VERSION = "1.0.0"

    # Start Time
    START_TIME = None
