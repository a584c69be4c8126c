# backend/xrayfix/scanners/xray_scanner.py
"""
Xray scan goal.

Given a pushed commit, finds the build the commit produced and asks Xray to
scan it. The target is the commit sha; ``options["branch"]`` names the branch.
"""

from typing import Dict, Any, List, Optional

from xrayfix.core.config import settings
from xrayfix.core.exceptions import BuildIdentifierError, PayloadError, RemoteCallError
from xrayfix.core.identifiers import parse_graph_build_id
from xrayfix.core.logging import logger
from xrayfix.scanners.base import BaseScannerPlugin, ScanResult, ScanStatus
from xrayfix.services.graph_service import GraphService
from xrayfix.services.xray_service import XrayService


class XrayScanner(BaseScannerPlugin):
    """Scan the build behind a commit with Xray"""

    name = "xray_scanner"
    version = "1.0.0"
    description = "Scans the dependencies of the build produced by a commit"
    display_name = "Xray Scan"
    working_description = "Scanning dependencies..."
    completed_description = "Dependencies scanned"
    failed_description = "Xray scan failed"

    def __init__(
        self,
        graph: Optional[GraphService] = None,
        xray: Optional[XrayService] = None,
        artifactory_id: Optional[str] = None,
    ):
        self.graph = graph
        self.xray = xray
        self.artifactory_id = artifactory_id or settings.XRAY_ARTIFACTORY_SERVER_ID

    async def initialize(self) -> None:
        """Initialize scanner"""
        self.graph = self.graph or GraphService()
        self.xray = self.xray or XrayService()

    async def scan(
        self,
        target: str,
        scan_id: str,
        options: Optional[Dict[str, Any]] = None
    ) -> ScanResult:
        """Execute the Xray scan goal for commit ``target``"""
        options = options or {}
        branch = options.get("branch", "")
        progress: List[str] = []
        metadata = {"sha": target, "branch": branch, "scan_id": scan_id}

        def failed(message: str) -> ScanResult:
            progress.append(message)
            logger.warning(f"{self.failed_description}: {message}", extra={"stage": "scan"})
            return ScanResult(
                status=ScanStatus.FAILED,
                findings=[],
                summary={"message": message},
                metadata=metadata,
                progress=progress,
                error=message,
            )

        progress.append("looking for builds")
        try:
            builds = await self.graph.find_builds_for_commit(target, branch)
        except (RemoteCallError, PayloadError) as e:
            return failed(f"build lookup failed: {e}")

        if not builds.commits:
            return failed("commit not found")
        commit = builds.commits[0]
        if not commit.builds or not commit.builds[0].build_id:
            return failed("no builds found")

        try:
            build = parse_graph_build_id(commit.builds[0].build_id)
        except BuildIdentifierError as e:
            return failed(str(e))
        metadata["build"] = str(build)

        progress.append(f"scanning {build.build_name}/{build.build_number}")
        try:
            alerts = await self.xray.scan_build(self.artifactory_id, build)
        except RemoteCallError as e:
            return failed(f"scan failed: {e}")

        logger.info(f"Got {len(alerts)} alert(s) for {build}")
        progress.append(self.completed_description)
        return ScanResult(
            status=ScanStatus.COMPLETED,
            findings=alerts,
            summary={"alerts": len(alerts)},
            metadata=metadata,
            progress=progress,
        )
