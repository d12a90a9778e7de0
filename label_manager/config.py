# =============================================================================
# Label Manager - Settings
# =============================================================================
"""
Pydantic Settings configuration for the label manager.

Loads login information, repository coordinates and client tuning from
environment variables (or a .env file) and builds the Credentials used by
every operation.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import CredentialsError
from .models import Credentials


class Settings(BaseSettings):
    """
    Settings loaded from environment variables.

    Attributes:
        github_username: GitHub username used for Basic authentication.
        github_token: Personal access token.
        home_repo_owner: Owner of the repository being edited.
        home_repo_name: Name of the repository being edited.
        template_repo_owner: Owner of the template repository.
        template_repo_name: Name of the template repository.
        github_api_base_url: GitHub API base URL.
        github_request_timeout: Request timeout in seconds.
        per_page: Page size for listings.
        max_pages: Maximum pages fetched by one listing.
        host: Server host address.
        port: Server port number.
        log_level: Logging level.
    """

    # -------------------------------------------------------------------------
    # Login Information
    # -------------------------------------------------------------------------
    github_username: str = Field(default="", description="GitHub username")
    github_token: str = Field(default="", description="Personal access token")

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------
    home_repo_owner: str = Field(default="", description="Home repository owner")
    home_repo_name: str = Field(default="", description="Home repository name")
    template_repo_owner: str = Field(default="", description="Template repository owner")
    template_repo_name: str = Field(default="", description="Template repository name")

    # -------------------------------------------------------------------------
    # Client Settings
    # -------------------------------------------------------------------------
    github_api_base_url: str = Field(
        default="https://api.github.com",
        description="GitHub API base URL",
    )
    github_request_timeout: float = Field(
        default=30.0,
        description="Request timeout in seconds",
    )
    per_page: int = Field(default=20, ge=1, le=100, description="Listing page size")
    max_pages: int = Field(default=100, ge=1, description="Page cap for listings")

    # -------------------------------------------------------------------------
    # Server Settings
    # -------------------------------------------------------------------------
    host: str = Field(
        default="0.0.0.0",
        description="Server host address",
        alias="label_manager_host",
    )
    port: int = Field(
        default=8090,
        description="Server port number",
        alias="label_manager_port",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def has_template(self) -> bool:
        """
        Check if a template repository is configured.

        Returns:
            True if both template owner and name are set.
        """
        return bool(self.template_repo_owner and self.template_repo_name)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with loaded configuration.
    """
    return Settings()


def get_credentials(settings: Optional[Settings] = None) -> Credentials:
    """
    Build Credentials from settings.

    Args:
        settings: Settings to read. Defaults to the cached settings.

    Returns:
        Credentials for one operation.

    Raises:
        CredentialsError: If the username, token or home repository is unset.
    """
    settings = settings or get_settings()

    missing = [
        name
        for name, value in (
            ("GITHUB_USERNAME", settings.github_username),
            ("GITHUB_TOKEN", settings.github_token),
            ("HOME_REPO_OWNER", settings.home_repo_owner),
            ("HOME_REPO_NAME", settings.home_repo_name),
        )
        if not value
    ]
    if missing:
        raise CredentialsError(
            f"Login information is incomplete; set {', '.join(missing)}"
        )

    return Credentials(
        username=settings.github_username,
        token=settings.github_token,
        home_owner=settings.home_repo_owner,
        home_repo=settings.home_repo_name,
        template_owner=settings.template_repo_owner,
        template_repo=settings.template_repo_name,
    )
