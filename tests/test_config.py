import os


LIVE_BASE_URL = os.environ.get("GRAMS_LIVE_API_URL", "").rstrip("/")

ROLE_TOKENS = {
    "admin": os.environ.get("GRAMS_ADMIN_TOKEN"),
    "engineer": os.environ.get("GRAMS_ENGINEER_TOKEN"),
}


def get_token(role: str) -> str | None:
    return ROLE_TOKENS.get(role) or None
