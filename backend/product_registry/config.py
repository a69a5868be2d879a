"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden by an environment variable (or .env)
    - get_settings() is cached (lru_cache) — single instance per process
    - Registry defaults (max products, fee, index capacity) match the ledger
      contract's initial values

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - role_assignments seeds the local role directory; in a ledger deployment
      the role registry is an external service and this map stays empty
"""

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from product_registry.core.domain_types import (
    CREATOR_INDEX_CAPACITY, DEFAULT_CREATION_FEE, DEFAULT_MAX_PRODUCTS,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./registry.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_create_schema: bool = True

    # Registry
    default_max_products: int = DEFAULT_MAX_PRODUCTS
    default_creation_fee: int = DEFAULT_CREATION_FEE
    creator_index_capacity: int = CREATOR_INDEX_CAPACITY
    treasury_identity: str = "registry-treasury"

    # Ledger
    genesis_height: int = 0

    # Roles (identity -> admin | supplier | certifier)
    role_assignments: dict[str, str] = {}

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator(
        "default_max_products", "creator_index_capacity", mode="after",
    )
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @field_validator("default_creation_fee", "genesis_height", mode="after")
    @classmethod
    def must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be >= 0")
        return v

    @model_validator(mode="after")
    def treasury_is_not_a_supplier(self) -> "Settings":
        # Fee transfers to self are refused (infrastructure/treasury.py)
        if self.role_assignments.get(self.treasury_identity) == "supplier":
            raise ValueError("treasury_identity cannot hold the supplier role")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
