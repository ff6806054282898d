"""Run configuration using pydantic-settings.

Every input can be supplied under its plain environment name or the form
GitHub Actions uses for action inputs (``INPUT_<NAME>``, hyphens kept).
"""

from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from deploy_resolver.core.exceptions import ConfigurationError
from deploy_resolver.core.locator import DEFAULT_SEARCH_RETRIES, DEPLOYMENT_SEARCH_INTERVAL
from deploy_resolver.core.poller import DEFAULT_READY_RETRIES, DEPLOYMENT_READY_INTERVAL

# Load .env file without clobbering values set by the runner
load_dotenv(override=False)


def _input(name: str, *extra: str) -> AliasChoices:
    """Accept ``name`` and its GitHub Actions ``input_`` spelling."""
    return AliasChoices(name.replace("-", "_"), f"input_{name}", *extra)


class Settings(BaseSettings):
    """Settings for a single resolver run."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True,
    )

    # Credentials
    vercel_token: str = Field(validation_alias=_input("vercel-token"))
    github_token: str = Field(validation_alias=_input("github-token"))

    # Vercel project
    project_id: str = Field(
        validation_alias=_input("project-id", "vercel_project_id")
    )
    team_id: str | None = Field(
        default=None, validation_alias=_input("team-id", "vercel_team_id")
    )

    # Retry budgets
    search_retries: int = Field(
        default=DEFAULT_SEARCH_RETRIES, validation_alias=_input("search-retries")
    )
    ready_retries: int = Field(
        default=DEFAULT_READY_RETRIES, validation_alias=_input("ready-retries")
    )
    search_interval: float = DEPLOYMENT_SEARCH_INTERVAL
    ready_interval: float = DEPLOYMENT_READY_INTERVAL

    # Target
    commit_sha: str = Field(validation_alias=_input("commit-sha", "github_sha"))
    target_branch: str | None = Field(
        default=None, validation_alias=_input("target-branch")
    )
    github_repository: str | None = None

    # Endpoints
    vercel_api_url: str = "https://api.vercel.com"
    github_api_url: str = "https://api.github.com"
    http_timeout: float = 30.0

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("search_retries", mode="before")
    @classmethod
    def _default_search_retries(cls, value: Any) -> int:
        return _positive_int(value, DEFAULT_SEARCH_RETRIES)

    @field_validator("ready_retries", mode="before")
    @classmethod
    def _default_ready_retries(cls, value: Any) -> int:
        return _positive_int(value, DEFAULT_READY_RETRIES)

    @field_validator("team_id", "target_branch", "github_repository", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def repository_slug(self) -> tuple[str, str] | None:
        """Split ``owner/repo`` or return None when unset or malformed."""
        if not self.github_repository:
            return None
        owner, _, repo = self.github_repository.partition("/")
        if not owner or not repo or "/" in repo:
            return None
        return owner, repo


def _positive_int(value: Any, default: int) -> int:
    """Parse a retry count, falling back to ``default`` like the action inputs."""
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def load_settings(**overrides: Any) -> Settings:
    """Build settings, turning validation failures into ConfigurationError."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(missing)}",
            {"errors": [err["msg"] for err in e.errors()]},
        ) from e
