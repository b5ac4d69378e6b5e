# homework_helper/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'  # лишние переменные в .env не мешают
    )

    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Дополнительные origin'ы для CORS через запятую
    CORS_ORIGINS: str = ""

    LOG_LEVEL: str = "INFO"
    CREATE_TABLES_ON_STARTUP: bool = False
    SQL_ECHO: bool = False

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

settings = Settings()
