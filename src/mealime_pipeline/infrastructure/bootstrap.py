from __future__ import annotations

from mealime_pipeline.application.ports.cookie_storage_port import CookieStoragePort
from mealime_pipeline.application.ports.http_client_port import TransportPort
from mealime_pipeline.config import Settings, settings as default_settings
from mealime_pipeline.domain.services.section_classifier import KeywordSectionClassifier
from mealime_pipeline.infrastructure.adapters.environment import EnvironmentStorageProbe
from mealime_pipeline.infrastructure.adapters.http.httpx_transport import HttpxTransport
from mealime_pipeline.infrastructure.adapters.http.requests_transport import RequestsTransport
from mealime_pipeline.infrastructure.adapters.mealime.session import MealimeSession
from mealime_pipeline.infrastructure.adapters.storage.json_file_store import JsonFileCookieStorage
from mealime_pipeline.infrastructure.adapters.storage.memory_store import InMemoryCookieStorage
from mealime_pipeline.infrastructure.adapters.storage.sqlite_store import SQLiteCookieStorage


def build_transport(cfg: Settings) -> TransportPort:
    if cfg.http_backend == "httpx":
        return HttpxTransport(timeout=cfg.http_timeout)
    if cfg.http_backend == "requests":
        return RequestsTransport(timeout=cfg.http_timeout)
    raise ValueError(f"unknown HTTP_BACKEND {cfg.http_backend!r} (expected httpx or requests)")


def build_storage(cfg: Settings) -> CookieStoragePort:
    if cfg.cookie_storage == "json":
        return JsonFileCookieStorage(cfg.cookie_jar_path)
    if cfg.cookie_storage == "sqlite":
        return SQLiteCookieStorage(cfg.cookie_db_path)
    if cfg.cookie_storage == "memory":
        return InMemoryCookieStorage()
    raise ValueError(f"unknown COOKIE_STORAGE {cfg.cookie_storage!r} (expected json, sqlite or memory)")


def build_session(cfg: Settings | None = None) -> MealimeSession:
    """Single place where the session's adapters are chosen from settings."""
    cfg = cfg or default_settings
    return MealimeSession(
        cfg.mealime_email,
        cfg.mealime_password,
        transport=build_transport(cfg),
        storage=build_storage(cfg),
        probe=EnvironmentStorageProbe(cfg.deployment_env_var, persist=cfg.persist_cookies),
        classifier=KeywordSectionClassifier(),
        base_url=cfg.mealime_base_url,
    )
