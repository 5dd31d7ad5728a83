from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    SECRET_KEY: str = "dev-secret-key-change-me"
    APP_NAME: str = "schoolforms"
    LOG_LEVEL: str = "INFO"
    SESSION_COOKIE_SAMESITE: str = "lax"
    SESSION_COOKIE_SECURE: bool = False
    # Where the host sends the browser after a successful submit (the "refresh")
    DEFAULT_REDIRECT: str = "/"


settings = Settings()
