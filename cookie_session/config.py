"""Session middleware configuration pulled from environment variables via pydantic."""
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session/config")

SameSite = Literal["", "lax", "strict", "none"]


class SessionSettings(BaseSettings):
    """Cookie, cache-key and TTL options for SessionMiddleware."""
    model_config = SettingsConfigDict(env_prefix="SESSION_", extra="ignore")

    ttl: int = Field(default=3600, ge=0)  # 0 -> browser-session cookie
    cookie_name: str = "SID"
    cookie_path: str = "/"
    cookie_domain: str = ""
    cookie_secure: bool = False
    cookie_http_only: bool = True
    cookie_same_site: SameSite = "lax"
    key_prefix: str = "sess:"
    redis_url: str | None = None
    log_level: str = "INFO"

    @field_validator("cookie_same_site", mode="before")
    @classmethod
    def lowercase_same_site(cls, v):
        """Accept 'Lax', 'STRICT', etc."""
        if v is None:
            return ""
        return str(v).strip().lower()

    @model_validator(mode="after")
    def same_site_none_requires_secure(self) -> "SessionSettings":
        """Browsers reject SameSite=None cookies that are not Secure."""
        if self.cookie_same_site == "none" and not self.cookie_secure:
            logger.debug("cookie_same_site='none' forces cookie_secure=True")
            self.cookie_secure = True
        return self


settings = SessionSettings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4)}")
