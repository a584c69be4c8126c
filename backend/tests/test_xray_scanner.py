# tests/test_xray_scanner.py
"""
Xray scan goal tests
Tests: build lookup, scan results, failure reporting, plugin registration
"""

import pytest

from xrayfix.core.exceptions import RemoteCallError
from xrayfix.scanners import PluginManager, ScanStatus, XrayScanner
from xrayfix.schemas.graph import CommitQueryResult

from conftest import commit_result


@pytest.fixture
def scanner(graph, xray):
    return XrayScanner(graph=graph, xray=xray, artifactory_id="art-1")


class TestXrayScanner:
    """Test scanning the build behind a commit"""

    @pytest.mark.asyncio
    async def test_scan_completes(self, scanner, graph, xray):
        xray.scan_build.return_value = [{"topSeverity": "High"}, {"topSeverity": "Low"}]

        result = await scanner.scan("abc123", "scan-1", {"branch": "master"})

        assert result.status == ScanStatus.COMPLETED
        assert result.summary == {"alerts": 2}
        assert result.progress == ["looking for builds", "scanning myjob/42", "Dependencies scanned"]
        graph.find_builds_for_commit.assert_awaited_once_with("abc123", "master")
        artifactory_id, build = xray.scan_build.await_args.args
        assert artifactory_id == "art-1"
        assert str(build) == "myjob:42"

    @pytest.mark.asyncio
    async def test_commit_not_found(self, scanner, graph, xray):
        graph.find_builds_for_commit.return_value = CommitQueryResult.model_validate({"Commit": []})

        result = await scanner.scan("abc123", "scan-1", {"branch": "master"})

        assert result.status == ScanStatus.FAILED
        assert result.error == "commit not found"
        xray.scan_build.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_builds(self, scanner, graph):
        graph.find_builds_for_commit.return_value = CommitQueryResult.model_validate(
            {"Commit": [{"sha": "abc123", "builds": []}]}
        )

        result = await scanner.scan("abc123", "scan-1", {"branch": "master"})

        assert result.error == "no builds found"

    @pytest.mark.asyncio
    async def test_malformed_build_id(self, scanner, graph):
        graph.find_builds_for_commit.return_value = commit_result(build_id="myjob:42")

        result = await scanner.scan("abc123", "scan-1", {"branch": "master"})

        assert result.status == ScanStatus.FAILED

    @pytest.mark.asyncio
    async def test_scan_failure(self, scanner, xray):
        xray.scan_build.side_effect = RemoteCallError("xray", "HTTP 500", 500)

        result = await scanner.scan("abc123", "scan-1", {"branch": "master"})

        assert result.status == ScanStatus.FAILED
        assert result.error.startswith("scan failed")


class TestPluginManager:
    """Test scanner registration"""

    @pytest.mark.asyncio
    async def test_lookup_by_type(self, scanner):
        manager = PluginManager([scanner])
        await manager.initialize()

        assert await manager.get_scanner("xray") is scanner
        assert await manager.get_scanner("web") is None
        await manager.cleanup_all()
