"""Configuration management for IdeaVault."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    pass


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Secrets default to empty strings so the service can boot unconfigured;
    ``ideavault.core.env_validator`` reports what is missing.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    IDEAVAULT_ENV: str = Field(default="dev", description="Environment: dev, test, prod")
    APP_URL: str = Field(default="http://localhost:3000", description="Public application URL")

    # Clerk authentication
    CLERK_PUBLISHABLE_KEY: str = Field(default="", description="Clerk publishable key")
    CLERK_SECRET_KEY: str = Field(default="", description="Clerk secret key")
    CLERK_JWT_KEY: str = Field(
        default="", description="Clerk instance PEM public key for session token verification"
    )
    CLERK_AUTHORIZED_PARTIES: str = Field(
        default="", description="Comma-separated list of allowed azp origins (optional)"
    )

    # Supabase: read-only ideas database
    SUPABASE_IDEAS_URL: str = Field(default="", description="Ideas Supabase project URL")
    SUPABASE_IDEAS_ANON_KEY: str = Field(default="", description="Ideas Supabase anon key")

    # Supabase: user data database
    SUPABASE_USER_URL: str = Field(default="", description="User data Supabase project URL")
    SUPABASE_USER_ANON_KEY: str = Field(default="", description="User data Supabase anon key")
    SUPABASE_USER_SERVICE_ROLE_KEY: str = Field(
        default="", description="User data service role key (server-side writes)"
    )

    # Gemini
    GOOGLE_GEMINI_API_KEY: str = Field(default="", description="Google Gemini API key")
    GEMINI_MODEL: str = Field(default="gemini-2.5-flash", description="Model for synthesis")
    GEMINI_EMBEDDING_MODEL: str = Field(
        default="text-embedding-004", description="Model for query embeddings"
    )

    # LLM resilience
    LLM_REQUEST_TIMEOUT_SECONDS: float = Field(default=20.0, description="Per-attempt timeout")
    LLM_RETRY_ATTEMPTS: int = Field(default=3, description="Total attempts per LLM call")
    LLM_RETRY_BASE_DELAY_SECONDS: float = Field(
        default=1.0, description="First backoff delay, doubled per attempt"
    )

    # Quotas (per rolling hour)
    EMBEDDING_HOURLY_QUOTA: int = Field(default=1000, description="Max embeddings per hour")
    REPORT_HOURLY_QUOTA: int = Field(default=100, description="Max reports per hour")

    # Caches
    EMBEDDING_CACHE_TTL_SECONDS: int = Field(default=1800, description="Embedding cache TTL")
    REPORT_CACHE_TTL_SECONDS: int = Field(default=3600, description="Report cache TTL")
    REPORT_CHECKSUM_INCLUDE_TIMESTAMP: bool = Field(
        default=True,
        description="Mix request time into the report checksum (every request gets a fresh key)",
    )

    # Idea generation
    STRUCTURED_SIMILARITY_THRESHOLD: float = Field(default=0.6)
    FREEFORM_SIMILARITY_THRESHOLD: float = Field(default=0.5)
    MAX_IDEAS_PER_REQUEST: int = Field(default=10)

    # Sharing
    SHARE_LINK_DEFAULT_EXPIRY_DAYS: int = Field(default=30)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance
    """
    return Settings()
