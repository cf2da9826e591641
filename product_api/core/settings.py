from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./products.db"
    DB_ECHO: bool = False
    DB_POOL_PRE_PING: bool = True
    CREATE_SCHEMA: bool = True
    SEED_SAMPLE_DATA: bool = False

    API_PREFIX: str = ""
    CORS_ORIGINS: list[str] = ["http://localhost:4200"]

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True



    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

settings = Settings()
