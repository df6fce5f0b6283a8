from dataclasses import dataclass
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from localizer.exceptions import ConfigurationError

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Localizer Host"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Localization settings
    supported_languages: list[str] = ["en", "sv"]
    default_language: Optional[str] = None
    unsupported_culture_policy: Literal["reject", "fallback"] = "reject"
    query_string_override: bool = False
    apply_content_language: bool = False

    # Transport security
    https_redirect: Optional[bool] = None
    hsts_max_age: int = 60 * 60 * 24 * 30  # 30 days

    # Static files
    static_dir: str = "static"

    # Logging settings
    log_level: str = "INFO"
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("supported_languages")
    @classmethod
    def strip_languages(cls, value: list[str]) -> list[str]:
        cleaned: list[str] = []
        for code in value:
            code = code.strip()
            if code and code.lower() not in (c.lower() for c in cleaned):
                cleaned.append(code)
        return cleaned

    @model_validator(mode="after")
    def check_default_language(self) -> "Settings":
        if not self.supported_languages:
            raise ConfigurationError("supported_languages must contain at least one locale")
        if self.default_language is not None:
            lowered = [c.lower() for c in self.supported_languages]
            if self.default_language.lower() not in lowered:
                raise ConfigurationError(
                    f"default_language '{self.default_language}' is not one of {self.supported_languages}",
                    setting="default_language",
                )
        return self

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def use_https_redirect(self) -> bool:
        if self.https_redirect is not None:
            return self.https_redirect
        return not self.is_development


@dataclass(frozen=True)
class LocalizationOptions:
    """Immutable localization configuration shared by every request.

    Built once in ``create_app()`` and handed to the middleware and routes
    through ``app.state``. ``supported`` is ordered and its first element is
    the default locale.
    """

    supported: tuple[str, ...]
    unsupported_culture_policy: str = "reject"
    query_string_override: bool = False
    apply_content_language: bool = False

    def __post_init__(self):
        if not self.supported:
            raise ConfigurationError("At least one supported locale is required")
        if self.unsupported_culture_policy not in ("reject", "fallback"):
            raise ConfigurationError(
                f"Unknown unsupported_culture_policy '{self.unsupported_culture_policy}'",
                setting="unsupported_culture_policy",
            )

    @property
    def default(self) -> str:
        return self.supported[0]

    @classmethod
    def from_settings(cls, settings: Settings) -> "LocalizationOptions":
        supported = list(settings.supported_languages)
        if settings.default_language is not None:
            default = next(c for c in supported if c.lower() == settings.default_language.lower())
            supported.remove(default)
            supported.insert(0, default)
        return cls(
            supported=tuple(supported),
            unsupported_culture_policy=settings.unsupported_culture_policy,
            query_string_override=settings.query_string_override,
            apply_content_language=settings.apply_content_language,
        )


settings = Settings()
