from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Literal


class Settings(BaseSettings):
    APP_NAME: str = "Solana Playground Service"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Pre-built project skeletons
    TEMPLATE_RS: str = "/app/template-rs"
    TEMPLATE_TS: str = "/app/template-ts"

    # Endpoints substituted for the loopback validator in user code
    SOLANA_URL: str = "http://solana-validator:8899"
    SOLANA_WS_URL: str = "ws://solana-validator:8900"

    # Execution
    EXECUTION_TIMEOUT_S: int = 30
    HEALTH_TIMEOUT_S: int = 10
    WORKSPACE_MODE: Literal["serialized", "isolated"] = "serialized"
    WORKSPACE_TMP_DIR: str | None = None  # parent of isolated copies

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
