"""Application configuration."""

from pathlib import Path
from typing import Literal
from pydantic import BaseModel, Field, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    """Database configuration."""

    url: str = "postgresql+asyncpg://qa:qa@localhost:5432/qa"
    pool_size: int = 5
    max_overflow: int = 10


class AuthSettings(BaseModel):
    """Authentication configuration.

    Sessions are issued by the auth service; this API only verifies them.
    """

    jwt_secret: str = "CHANGE_ME_IN_PRODUCTION"  # Must be overridden in production
    jwt_algorithm: str = "HS256"
    jwt_expiry_days: int = 30


class VotingSettings(BaseModel):
    """Vote engine configuration."""

    # Whether users may vote on their own questions and answers
    # The community has always allowed it; set to False to reject self-votes
    allow_self_vote: bool = True

    # Upper bound on waiting for another request's lock on the same target
    lock_timeout_seconds: float = Field(default=2.0, gt=0)

    # Total attempts for a vote that hit a conflicting write (1 retry)
    max_attempts: int = Field(default=2, ge=1)


class ReputationSettings(BaseModel):
    """Reputation weights.

    reputation = answer_upvote * upvotes on answers
               + answer_downvote * downvotes on answers
               + question_upvote * upvotes on questions
               + question_downvote * downvotes on questions
               + accepted_answer * accepted answers
    """

    answer_upvote: int = 10
    answer_downvote: int = -2
    question_upvote: int = 0
    question_downvote: int = 0
    accepted_answer: int = 15


class PaginationSettings(BaseModel):
    """Listing page sizes."""

    default_limit: int = Field(default=10, ge=1)
    admin_default_limit: int = Field(default=7, ge=1)
    max_limit: int = Field(default=50, ge=1)


class APISettings(BaseModel):
    """API configuration."""

    host: str
    port: int
    protocol: Literal["http", "https"]
    frontend_host: str

    @computed_field
    @property
    def base_url(self) -> str:
        """Construct base URL from host.

        In development: http://localhost:8000
        In production: https://<host>
        """
        if self.host == "localhost":
            return f"{self.protocol}://{self.host}:{self.port}"
        else:
            # Production uses standard ports (80/443)
            return f"{self.protocol}://{self.host}"

    @computed_field
    @property
    def frontend_url(self) -> str:
        """Frontend URL allowed by CORS.

        In development: http://localhost:3000
        In production: https://<frontend_host>
        """
        if self.frontend_host == "localhost":
            return "http://localhost:3000"
        else:
            return f"{self.protocol}://{self.frontend_host}"


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Configuration is driven by environment and host values, with all URLs
    computed from them. Set environment variables to override:

    Development (default):
        HOST=localhost
        PORT=8000
        ENVIRONMENT=development
        -> API: http://localhost:8000
        -> Frontend: http://localhost:3000

    Production:
        HOST=api.example.com
        ENVIRONMENT=production
        FRONTEND_HOST=example.com
        -> API: https://api.example.com
        -> Frontend: https://example.com
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows DATABASE__URL syntax
    )

    # Environment determines protocol and defaults
    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Git commit SHA (loaded from version.txt file or defaults to "unknown")
    git_sha: str = "unknown"

    # Host configuration (all URLs computed from these)
    host: str = "localhost"
    port: int = 8000
    frontend_host: str = "localhost"

    # Nested settings
    database: DatabaseSettings = DatabaseSettings()
    auth: AuthSettings = AuthSettings()
    api: APISettings = APISettings(
        host="localhost", port=8000, protocol="http", frontend_host="localhost"
    )  # Overwritten in validator
    voting: VotingSettings = VotingSettings()
    reputation: ReputationSettings = ReputationSettings()
    pagination: PaginationSettings = PaginationSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @model_validator(mode="after")
    def initialize_api_settings(self) -> "Settings":
        """Initialize API settings from host and environment."""
        protocol: Literal["http", "https"] = (
            "http" if self.environment in ("test", "development") else "https"
        )

        self.api = APISettings(
            host=self.host,
            port=self.port,
            protocol=protocol,
            frontend_host=self.frontend_host,
        )

        # Load git SHA from version file if it exists
        self.git_sha = self._load_git_sha()

        return self

    @staticmethod
    def _load_git_sha() -> str:
        """Load git SHA from version file.

        Returns:
            Git SHA if version file exists, otherwise "unknown"
        """
        version_file = Path("/app/version.txt")
        if version_file.exists():
            try:
                return version_file.read_text().strip()
            except OSError:
                return "unknown"
        # In development, version file may not exist
        return "unknown"

    @property
    def database_url(self) -> str:
        """Shortcut for the database URL."""
        return self.database.url
