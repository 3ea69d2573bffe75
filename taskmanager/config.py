import os

from dotenv import load_dotenv

# Load .env from the working directory so local overrides are picked up
load_dotenv(override=False)


def _env_list(name, default):
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    TASKS_FILE = os.environ.get("TASKS_FILE", "tasks.json")
    CORS_ORIGINS = _env_list("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")

    HOST = os.environ.get("HOST", "127.0.0.1")
    PORT = int(os.environ.get("PORT", "5001"))
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"


class ClientConfig:
    API_URL = os.environ.get("TASKS_API_URL", "http://localhost:5001/api")
    CACHE_FILE = os.path.expanduser(
        os.environ.get("TASKS_CACHE_FILE", "~/.taskmanager/local_storage.json")
    )
    TIMEOUT = float(os.environ.get("TASKS_API_TIMEOUT", "5"))
