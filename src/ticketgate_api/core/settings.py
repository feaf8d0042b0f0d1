from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="allow")

    environment: Literal["development", "staging", "production"] = "development"
    database_url: str = "sqlite+aiosqlite:///./ticketgate.db"
    database_pool_size: int = 10
    database_max_overflow: int = 0

    # Entrance scanning
    scan_api_key: str = ""
    ticket_collection: str = "tickets"
    role_collections: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["speakers", "visitors", "partners"]
    )
    store_call_timeout_seconds: float = 5.0
    accepted_payment_statuses: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["paid", "captured", "success", "completed"]
    )
    free_category_markers: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["free", "general", "complimentary"]
    )
    # Whole-category matches; "0" alone marks a zero-priced tier.
    free_categories: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["0"])

    @field_validator(
        "role_collections",
        "accepted_payment_statuses",
        "free_category_markers",
        "free_categories",
        mode="before",
    )
    @classmethod
    def _parse_comma_list(cls, value: object) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, (list, tuple, set)):
            return [str(item).strip() for item in value if str(item).strip()]
        return []

    # Event context printed on badges
    event_name: str = "RailTrans Expo"
    event_date: str = ""
    event_venue: str = ""

    # Badge rendering collaborator
    badge_renderer_url: str | None = None
    badge_renderer_api_key: str | None = None
    badge_renderer_timeout_seconds: float = 10.0
    badge_template_url: str = ""


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


settings = get_settings()
