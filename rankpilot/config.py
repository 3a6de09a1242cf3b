"""
RankPilot — Configuration via environment variables.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """All settings read from env / .env file."""

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./rankpilot.db",
        description="Async SQLAlchemy DB URL",
    )

    # AI — multi-provider support ("openai" or "anthropic")
    ai_provider: str = Field(
        default="openai",
        description="AI provider: 'openai' (any OpenAI-compatible endpoint) or 'anthropic' (Claude)",
    )
    openai_api_key: str = Field(default="", description="API key for the OpenAI-compatible endpoint")
    anthropic_api_key: str = Field(default="", description="Anthropic API key for Claude models")
    ai_api_url: str = Field(
        default="",
        description="Override AI API URL (auto-set per provider if blank)",
    )
    ai_model: str = Field(default="")
    ai_timeout_secs: int = Field(default=120, description="Total timeout for one AI request")
    ai_max_tokens: int = Field(default=4000)

    @property
    def ai_effective_url(self) -> str:
        """Resolve API URL based on provider."""
        if self.ai_api_url:
            return self.ai_api_url
        if self.ai_provider == "anthropic":
            return "https://api.anthropic.com/v1/messages"
        return "https://api.openai.com/v1/chat/completions"

    @property
    def ai_effective_model(self) -> str:
        """Resolve model name based on provider."""
        if self.ai_model:
            return self.ai_model
        if self.ai_provider == "anthropic":
            return "claude-sonnet-4-20250514"
        return "gpt-4o"

    @property
    def ai_auth_token(self) -> str:
        """Token for AI API calls — provider-specific."""
        if self.ai_provider == "anthropic":
            return self.anthropic_api_key
        return self.openai_api_key

    # Firebase (auth + realtime activity feed)
    firebase_cred_path: str = Field(
        default="", description="Path to Firebase service account key JSON"
    )
    firebase_db_url: str = Field(
        default="",
        description="Firebase RTDB URL for the realtime activity feed",
    )
    allow_dev_user_header: bool = Field(
        default=False,
        description="Accept X-User-Id instead of a Firebase ID token (local dev only)",
    )

    # Activity logging
    activity_persist_mode: str = Field(
        default="await",
        description="'await' writes the activity before responding, 'background' does not wait",
    )

    # Tool response cache (0 disables)
    tool_cache_ttl_secs: int = Field(default=3600)
    tool_cache_max_entries: int = Field(default=1000)

    # Per-tier requests per minute
    rate_limit_free: int = Field(default=5)
    rate_limit_starter: int = Field(default=20)
    rate_limit_agency: int = Field(default=60)
    rate_limit_enterprise: int = Field(default=200)
    rate_limit_admin: int = Field(default=1000)

    @property
    def rate_limits(self) -> dict[str, int]:
        return {
            "free": self.rate_limit_free,
            "starter": self.rate_limit_starter,
            "agency": self.rate_limit_agency,
            "enterprise": self.rate_limit_enterprise,
            "admin": self.rate_limit_admin,
        }

    # Maintenance
    migration_page_size: int = Field(default=500, description="Rows read per page during migrations")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def get_settings() -> Settings:
    return Settings()
