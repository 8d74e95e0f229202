"""
Runtime settings for the quiz server, read from the environment / .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


QUIZ_HOST = os.getenv("QUIZ_HOST", "127.0.0.1")
QUIZ_PORT = int(os.getenv("QUIZ_PORT", "5000"))
QUIZ_DEBUG = _env_flag("QUIZ_DEBUG")

# Page route; a reload of this page starts a fresh answer session
QUIZ_ROUTE = os.getenv("QUIZ_ROUTE", "/extreme-secret-santa")

# Upper bound on live sessions kept in memory (oldest evicted first)
QUIZ_MAX_SESSIONS = int(os.getenv("QUIZ_MAX_SESSIONS", "256"))
