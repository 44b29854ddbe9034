import os
from dotenv import load_dotenv

load_dotenv()

REDIS_URL = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
DEFAULT_PRODUCT_TYPE = os.environ.get("DEFAULT_PRODUCT_TYPE", "sticker").strip().lower() or "sticker"
WORKFLOW_TTL_SEC = int(os.environ.get("WORKFLOW_TTL_SEC", str(30 * 24 * 3600)))
