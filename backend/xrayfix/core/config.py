# backend/xrayfix/core/config.py
from typing import Optional
from pathlib import Path
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Locate the .env file relative to the project root
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
ENV_FILE = BASE_DIR / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(ENV_FILE), extra="ignore")

    # Application
    PROJECT_NAME: str = "xrayfix"
    VERSION: str = "1.0.0"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Xray (vulnerability scanner)
    XRAY_BASE_URL: str = "http://localhost:8000/xray"
    XRAY_USERNAME: Optional[str] = None
    XRAY_PASSWORD: Optional[str] = None
    XRAY_TOKEN: Optional[str] = None
    XRAY_ARTIFACTORY_SERVER_ID: str = "artifactory"
    XRAY_WEBHOOK_SECRET: Optional[str] = None

    # Artifactory (build metadata + repository configuration)
    ARTIFACTORY_BASE_URL: str = "http://localhost:8081/artifactory"
    ARTIFACTORY_TOKEN: Optional[str] = None
    ARTIFACTORY_REPOSITORY: str = "libs-release"

    # Commit/build graph
    GRAPHQL_URL: str = "http://localhost:8080/graphql"
    GRAPHQL_TOKEN: Optional[str] = None

    # GitHub
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_TOKEN: Optional[str] = None

    # Slack
    SLACK_API_URL: str = "https://slack.com/api"
    SLACK_BOT_TOKEN: Optional[str] = None
    SLACK_RESPONSE_HOST: str = "hooks.slack.com"

    # Outbound calls
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Deduplication store
    REDIS_URL: Optional[str] = None
    DEDUP_CACHE_SIZE: int = 10000
    DEDUP_TTL_SECONDS: int = 7 * 24 * 3600

    # Remediation
    BRANCH_PREFIX: str = "xray-fix-"
    BUILD_FILE_GLOB: str = "**/build.gradle"
    PULL_REQUEST_TITLE: str = "Update dependencies due to XRay Violations"

    @field_validator("XRAY_BASE_URL", "ARTIFACTORY_BASE_URL", "GITHUB_API_URL", "SLACK_API_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("HTTP_TIMEOUT_SECONDS")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("HTTP_TIMEOUT_SECONDS must be positive")
        return v


settings = Settings()
