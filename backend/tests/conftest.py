"""
Pytest configuration and fixtures
Shared test setup for all test modules
"""

import pytest
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from xrayfix.api.dependencies import get_orchestrator, get_plugin_manager, get_services
from xrayfix.main import app
from xrayfix.remediation import IssueNotifier, RemediationOrchestrator
from xrayfix.schemas.graph import CommitQueryResult
from xrayfix.schemas.repository import RepositoryConfig
from xrayfix.schemas.summary import BuildSummary
from xrayfix.schemas.violation import Violation
from xrayfix.services import ServiceContainer
from xrayfix.services.artifactory_service import ArtifactoryService
from xrayfix.services.chat_service import ChatService
from xrayfix.services.dedup_cache import InMemoryDeduplicationCache
from xrayfix.services.github_service import GitHubService
from xrayfix.services.graph_service import GraphService
from xrayfix.services.xray_service import XrayService
from xrayfix.vcs.project import InMemoryProject, ProjectLoader


STRING_NOTATION = """
plugins {
    id 'se.patrikerdes.use-latest-versions'
    id 'com.github.ben-manes.versions' version '$CurrentVersions.VERSIONS'
}
apply plugin: 'java'

repositories {
    mavenCentral()
}

dependencies {
    testCompile 'junit:junit:4.0'
}"""

MAP_NOTATION = """
plugins {
    id 'se.patrikerdes.use-latest-versions'
    id 'com.github.ben-manes.versions' version '$CurrentVersions.VERSIONS'
}

apply plugin: 'java'

repositories {
    mavenCentral()
}

dependencies {
    testCompile group: 'junit', name: 'junit', version: '4.0'
}"""

JFROG_PROJECT_EXAMPLE = """
    apply plugin: 'war'

    dependencies {
        compile project(':shared'), 'commons-collections:commons-collections:3.2@jar', \\
             'commons-io:commons-io:1.2', 'commons-lang:commons-lang:2.4@jar'
        compile group: 'org.apache.wicket', name: 'wicket', version: '1.3.7'
        compile group: 'org.apache.struts', name: 'struts2-core', version: '2.3.14'
        compile group: 'junit', name: 'junit', version: '4.11'
        compile project(':api')
    }"""


def summary_issue(
    component_id: str = "gav://junit:junit:4.0",
    fixed_versions=("4.1",),
    cve: str = "CVE-123",
    summary: str = "CVE-123 fixes blah blah",
) -> Dict[str, Any]:
    return {
        "issue_id": "XRAY-1",
        "summary": summary,
        "severity": "High",
        "components": [{"component_id": component_id, "fixed_versions": list(fixed_versions)}],
        "cves": [{"cve": cve}],
    }


def violation_event(*display_names: str, provider: str = "JFrog") -> Dict[str, Any]:
    return {
        "issues": [
            {
                "summary": "CVE-123 fixes blah blah",
                "description": "Remote code execution in junit",
                "provider": provider,
                "impacted_artifacts": [
                    {
                        "display_name": name,
                        "infected_files": [{"display_name": "gav://junit:junit:4.0"}],
                    }
                    for name in display_names
                ],
            }
        ]
    }


def commit_result(build_id: str = "jenkins:prod:myjob:42", data: str = '{"buildDir": ""}') -> CommitQueryResult:
    return CommitQueryResult.model_validate({
        "Commit": [
            {
                "sha": "abc123",
                "builds": [
                    {
                        "buildId": build_id,
                        "name": "myjob",
                        "data": data,
                        "repo": {
                            "owner": "acme",
                            "name": "service",
                            "channels": [{"channelId": "C123", "name": "service"}],
                        },
                        "push": {"branch": "master"},
                    }
                ],
            }
        ]
    })


class StaticProjectLoader(ProjectLoader):
    """Hands out a prepared project and records what was asked for"""

    def __init__(self, project: InMemoryProject):
        self.project = project
        self.loaded = []

    async def load(self, owner: str, name: str, branch: str) -> InMemoryProject:
        self.loaded.append((owner, name, branch))
        return self.project


@pytest.fixture
def violation() -> Violation:
    return Violation.model_validate(violation_event("myjob:42"))


@pytest.fixture
def build_summary() -> BuildSummary:
    return BuildSummary.model_validate({"issues": [summary_issue()]})


@pytest.fixture
def project() -> InMemoryProject:
    return InMemoryProject(
        {"build.gradle": STRING_NOTATION, "README.md": "junit:junit:4.0"},
        owner="acme",
        name="service",
    )


@pytest.fixture
def xray(build_summary) -> MagicMock:
    service = MagicMock(spec=XrayService)
    service.get_build_summary = AsyncMock(return_value=build_summary)
    service.create_issue = AsyncMock()
    service.scan_build = AsyncMock(return_value=[])
    return service


@pytest.fixture
def artifactory() -> MagicMock:
    service = MagicMock(spec=ArtifactoryService)
    service.build_to_commit = AsyncMock(return_value="abc123")
    service.get_repo_config = AsyncMock(return_value=RepositoryConfig(key="libs-release", excludesPattern=""))
    service.set_repo_config = AsyncMock()
    return service


@pytest.fixture
def graph() -> MagicMock:
    service = MagicMock(spec=GraphService)
    service.find_build_for_commit = AsyncMock(return_value=commit_result())
    service.find_builds_for_commit = AsyncMock(return_value=commit_result())
    return service


@pytest.fixture
def chat() -> MagicMock:
    service = MagicMock(spec=ChatService)
    service.respond = AsyncMock()
    service.address_channel = AsyncMock()
    return service


@pytest.fixture
def cache() -> InMemoryDeduplicationCache:
    return InMemoryDeduplicationCache(capacity=100)


@pytest.fixture
def loader(project) -> StaticProjectLoader:
    return StaticProjectLoader(project)


@pytest.fixture
def orchestrator(xray, artifactory, graph, chat, cache, loader) -> RemediationOrchestrator:
    return RemediationOrchestrator(
        xray=xray,
        artifactory=artifactory,
        graph=graph,
        loader=loader,
        cache=cache,
        notifier=IssueNotifier(artifactory, graph, chat),
        branch_prefix="xray-fix-",
        title="Update dependencies due to XRay Violations",
        file_glob="**/build.gradle",
    )


@pytest.fixture
def services(xray, artifactory, graph, chat, cache) -> ServiceContainer:
    return ServiceContainer(
        xray=xray,
        artifactory=artifactory,
        graph=graph,
        chat=chat,
        github=MagicMock(spec=GitHubService),
        cache=cache,
    )


@pytest.fixture
def client(services, orchestrator) -> TestClient:
    """Create test client with service overrides"""

    app.dependency_overrides[get_services] = lambda: services
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
