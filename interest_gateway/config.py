"""Configuration management using Pydantic Settings"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Acquisition order, first success wins: saved | direct | browser
    rate_sources: str = "saved,direct,browser"
    saved_html_path: str | None = None

    # Rate table pages (English first, Greek fallback)
    site_root: str = "https://www.bankofgreece.gr/"
    rate_urls: List[str] = [
        "https://www.bankofgreece.gr/en/statistics/financial-markets-and-interest-rates/interest-rates-applicable-on-ligitation",
        "https://www.bankofgreece.gr/statistika/xrhmatopistwtikes-agores/ekswtrapezika-epitokia",
    ]
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/122.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.9,el;q=0.8"

    # Service
    service_name: str = "interest-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 10.0
    fetch_max_retries: int = 3
    fetch_backoff_base: float = 1.0  # Exponential backoff base in seconds

    # Headless browser
    browser_timeout_seconds: float = 30.0

    @property
    def source_names(self) -> List[str]:
        return [name.strip().lower() for name in self.rate_sources.split(",") if name.strip()]


settings = Settings()
