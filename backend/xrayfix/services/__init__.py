# backend/xrayfix/services/__init__.py
from dataclasses import dataclass

from xrayfix.services.artifactory_service import ArtifactoryService
from xrayfix.services.chat_service import ChatService
from xrayfix.services.dedup_cache import DeduplicationCache, create_dedup_cache
from xrayfix.services.github_service import GitHubService
from xrayfix.services.graph_service import GraphService
from xrayfix.services.xray_service import XrayService


@dataclass
class ServiceContainer:
    """Outbound clients and shared state for one process"""
    xray: XrayService
    artifactory: ArtifactoryService
    graph: GraphService
    chat: ChatService
    github: GitHubService
    cache: DeduplicationCache

    @classmethod
    def create(cls) -> "ServiceContainer":
        return cls(
            xray=XrayService(),
            artifactory=ArtifactoryService(),
            graph=GraphService(),
            chat=ChatService(),
            github=GitHubService(),
            cache=create_dedup_cache(),
        )

    async def close(self) -> None:
        await self.cache.close()
