# backend/xrayfix/services/artifactory_service.py
"""
Artifactory client: build metadata and the remote repository configuration
that carries the download exclusion list.
"""
from typing import Any, Optional

from xrayfix.core.config import settings
from xrayfix.core.identifiers import BuildIdentity
from xrayfix.core.logging import logger
from xrayfix.schemas import parse_payload
from xrayfix.schemas.repository import BuildInfoResponse, RepositoryConfig
from xrayfix.services.http import RemoteService


class ArtifactoryService(RemoteService):
    service_name = "artifactory"

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        repository: Optional[str] = None,
        **kwargs: Any,
    ):
        token = token if token is not None else settings.ARTIFACTORY_TOKEN
        headers = {"X-JFrog-Art-Api": token} if token else {}
        self.repository = repository or settings.ARTIFACTORY_REPOSITORY
        super().__init__(base_url or settings.ARTIFACTORY_BASE_URL, headers=headers, **kwargs)

    async def build_to_commit(self, build: BuildIdentity) -> Optional[str]:
        """VCS revision a build was produced from"""
        logger.info(f"Grabbing build info for {build}")
        data = await self.get_json(f"/api/build/{build.build_name}/{build.build_number}")
        info = parse_payload(BuildInfoResponse, data, "artifactory build info")
        if not info.build_info.vcs_revision:
            logger.warning(f"Build {build} has no VCS revision")
        return info.build_info.vcs_revision

    async def get_repo_config(self) -> RepositoryConfig:
        data = await self.get_json(f"/api/repositories/{self.repository}")
        config = parse_payload(RepositoryConfig, data, "artifactory repository config")
        logger.info(f"Found repo config for {self.repository}")
        return config

    async def set_repo_config(self, config: RepositoryConfig) -> None:
        logger.info(f"Setting excludesPattern of {self.repository} to {config.excludes_pattern!r}")
        await self.request(
            "POST",
            f"/api/repositories/{self.repository}",
            json=config.payload(),
        )
