from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    CONSULTATION_API_BASE_URL: str = "https://servaura-api.onrender.com"
    CONSULTATION_API_TIMEOUT_SECONDS: float = 10.0
    USE_MOCK_API: bool = False

    BUSINESS_NAME: str = "Servaura"
    BUSINESS_TIMEZONE: str = "America/Los_Angeles"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"


settings = Settings()
