from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PATH = Path(__file__).resolve().parent.parent / ".env.local"


class Settings(BaseSettings):
    # Environment settings
    environment: str = "development"
    debug: bool = False
    LOG_LEVEL: str = "INFO"

    # VideoEngager settings (checked per request, not at startup)
    VE_BASE_URL: str | None = None
    PAK: str | None = None
    EXTERNAL_ID: str | None = None
    VE_REQUEST_TIMEOUT: float = 30.0

    # Amazon Connect defaults, overridable per request
    INSTANCE_ID: str | None = None
    FLOW_ID: str | None = None
    AWS_REGION: str | None = None

    # Inbound endpoint
    SCHEDULE_RESOURCE_PATH: str = "/schedule"

    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def missing_ve_settings(self) -> list[str]:
        """Names of the VideoEngager variables that are unset or empty."""
        required = {
            "PAK": self.PAK,
            "EXTERNAL_ID": self.EXTERNAL_ID,
            "VE_BASE_URL": self.VE_BASE_URL,
        }
        return [name for name, value in required.items() if not value]


settings = Settings()
