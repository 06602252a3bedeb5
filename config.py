from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Application Settings
    PROJECT_NAME: str = "Task Chat Server"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Database Configuration (task store)
    DATABASE_URL: str = "sqlite:///./tasks.db"

    # Logging
    LOG_LEVEL: str = "INFO"
    # Optional file target; rotated daily and kept for LOG_MAX_DAYS
    LOG_FILE: str | None = None
    LOG_MAX_DAYS: int = 7

    # Static assets served at "/" when the directory exists
    STATIC_DIR: str = "public"

    # Comma-separated lists; "*" allows any origin
    CORS_ORIGINS: str = "*"
    CHAT_ALLOWED_ORIGINS: str = "*"

    # Bound of the reader -> hub queue. Readers block while it is full; 0 means unbounded.
    CHAT_INBOUND_QUEUE_SIZE: int = 256

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    def _post_init(self):
        if self.CHAT_INBOUND_QUEUE_SIZE < 0:
            raise ValueError("CHAT_INBOUND_QUEUE_SIZE must be >= 0")
        if self.LOG_LEVEL.upper() not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unknown LOG_LEVEL {self.LOG_LEVEL!r}")

    @staticmethod
    def _split(raw: str) -> list[str]:
        return [item.strip() for item in raw.split(",") if item.strip()]

    @property
    def cors_origins(self) -> list[str]:
        return self._split(self.CORS_ORIGINS)

    @property
    def chat_allowed_origins(self) -> list[str]:
        return self._split(self.CHAT_ALLOWED_ORIGINS)

settings = Settings()
settings._post_init()
