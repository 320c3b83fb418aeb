from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env if present
load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    mealime_email: str = os.getenv("MEALIME_EMAIL", "")
    mealime_password: str = os.getenv("MEALIME_PASSWORD", "")
    mealime_base_url: str = os.getenv("MEALIME_BASE_URL", "https://app.mealime.com")
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "30"))
    http_backend: str = os.getenv("HTTP_BACKEND", "httpx")  # httpx | requests
    cookie_storage: str = os.getenv("COOKIE_STORAGE", "json")  # json | sqlite | memory
    cookie_jar_path: str = os.getenv("COOKIE_JAR_PATH", "cookiejar.json")
    cookie_db_path: str = os.getenv("COOKIE_DB_PATH", ".mealime_cookies.sqlite")
    persist_cookies: bool = _flag("PERSIST_COOKIES", "true")
    deployment_env_var: str = os.getenv("DEPLOYMENT_ENV_VAR", "DENO_DEPLOYMENT_ID")


settings = Settings()
