from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # ──────────────────────────────────────────────────────────────
    # Upstream feeds: shared config
    # URLs are fixed in the service modules; only transport knobs here.
    # ──────────────────────────────────────────────────────────────

    upstream_user_agent: str = Field(default="disaster-dashboard/1.0", alias="UPSTREAM_USER_AGENT")

    earthquakes_timeout_s: float = Field(default=10.0, alias="EARTHQUAKES_TIMEOUT_S")
    tsunami_timeout_s: float = Field(default=10.0, alias="TSUNAMI_TIMEOUT_S")
    volcanoes_timeout_s: float = Field(default=10.0, alias="VOLCANOES_TIMEOUT_S")
    floods_timeout_s: float = Field(default=12.0, alias="FLOODS_TIMEOUT_S")

    # ──────────────────────────────────────────────────────────────
    # ReliefWeb (flood reports)
    # The v2 API rejects calls without an appname.
    # ──────────────────────────────────────────────────────────────

    reliefweb_appname: str = Field(default="rtddr-demo", alias="RELIEFWEB_APPNAME")
    reliefweb_limit: int = Field(default=6, alias="RELIEFWEB_LIMIT")

    # ──────────────────────────────────────────────────────────────
    # GVP volcano scraping: tuning for the list-item fallback
    # ──────────────────────────────────────────────────────────────

    volcano_max_entries: int = Field(default=8, alias="VOLCANO_MAX_ENTRIES")
    volcano_fallback_min_chars: int = Field(default=10, alias="VOLCANO_FALLBACK_MIN_CHARS")
    volcano_fallback_name_chars: int = Field(default=60, alias="VOLCANO_FALLBACK_NAME_CHARS")

    # ──────────────────────────────────────────────────────────────
    # Dashboard page
    # ──────────────────────────────────────────────────────────────

    # Unset → the page calls this process's own /api routes in-process
    dashboard_api_base: str | None = Field(default=None, alias="DASHBOARD_API_BASE")
    dashboard_fetch_timeout_s: float = Field(default=20.0, alias="DASHBOARD_FETCH_TIMEOUT_S")
    dashboard_quake_limit: int = Field(default=50, alias="DASHBOARD_QUAKE_LIMIT")
    dashboard_volcano_limit: int = Field(default=6, alias="DASHBOARD_VOLCANO_LIMIT")
    dashboard_flood_limit: int = Field(default=6, alias="DASHBOARD_FLOOD_LIMIT")

    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
