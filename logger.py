import logging
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()
LOG_FILE = os.getenv('LOG_FILE_PATH', 'quiz_server.log')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# --- Logging Configuration ---
# Console always; file only when LOG_FILE_PATH is non-empty
handlers = [logging.StreamHandler()]
if LOG_FILE:
    handlers.append(logging.FileHandler(LOG_FILE, mode='a', encoding='utf-8'))

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    handlers=handlers
)

# Werkzeug logs every /submit request (one per keystroke); keep it to warnings
# unless we are debugging the quiz itself
if LOG_LEVEL != 'DEBUG':
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

# Shared by the quiz server, its session state and the smoke test
quiz_logger = logging.getLogger("SECRET_SANTA_QUIZ")
