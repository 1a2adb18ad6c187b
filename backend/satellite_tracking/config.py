from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # N2YO API settings
    n2yo_api_key: Optional[str] = None
    n2yo_base_url: str = "https://api.n2yo.com/rest/v1/satellite"
    n2yo_timeout: float = 10.0  # seconds per attempt
    n2yo_max_retries: int = 3
    n2yo_retry_delay: float = 1.0  # seconds, doubled on every retry

    # Logging settings
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # API settings
    api_v1_prefix: str = "/api/v1"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = 8000

    class Config:
        env_file = ".env"

settings = Settings()
