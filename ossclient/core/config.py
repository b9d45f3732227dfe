"""Library configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # Credentials file, read when inline credentials are not all set
    OSS_CONFIG_FILE: str = "~/.oss/credentials.json"

    # Inline credentials
    OSS_ENDPOINT: str = ""
    OSS_ACCESS_KEY_ID: str = ""
    OSS_ACCESS_KEY_SECRET: str = ""

    # Signed URLs
    OSS_DEFAULT_EXPIRE_SECONDS: int = 30
    OSS_USE_HTTPS: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    def has_inline_credentials(self) -> bool:
        return bool(self.OSS_ENDPOINT and self.OSS_ACCESS_KEY_ID and self.OSS_ACCESS_KEY_SECRET)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
