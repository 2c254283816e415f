from pathlib import Path

from quotemaker.config.settings import KEYS_ENV_FILENAME

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = PROJECT_ROOT / "data"
LOGS_DIR = PROJECT_ROOT / "logs"
APP_CONFIG_PATH = DATA_DIR / "app_config.json"
KEYS_ENV_PATH = PROJECT_ROOT / KEYS_ENV_FILENAME
LOG_FILE_PATH = LOGS_DIR / "app.log"
def ensure_runtime_dirs():
    for p in (DATA_DIR, LOGS_DIR):
        p.mkdir(parents=True, exist_ok=True)
