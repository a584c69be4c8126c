# backend/xrayfix/services/xray_service.py
"""
Xray client: build violation summaries, issue creation and build scans.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import httpx

from xrayfix.core.config import settings
from xrayfix.core.constants import COMPONENT_ID_PREFIX, INTERNAL_PROVIDER, INTERNAL_SOURCE_ID
from xrayfix.core.identifiers import BuildIdentity
from xrayfix.core.logging import logger
from xrayfix.schemas import parse_payload
from xrayfix.schemas.summary import BuildSummary, CreatedIssue
from xrayfix.services.http import RemoteService


class XrayService(RemoteService):
    service_name = "xray"

    def __init__(
        self,
        base_url: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        token: Optional[str] = None,
        **kwargs: Any,
    ):
        username = username if username is not None else settings.XRAY_USERNAME
        password = password if password is not None else settings.XRAY_PASSWORD
        self.token = token if token is not None else settings.XRAY_TOKEN
        auth = httpx.BasicAuth(username, password or "") if username else None
        super().__init__(base_url or settings.XRAY_BASE_URL, auth=auth, **kwargs)

    async def get_build_summary(self, build: BuildIdentity) -> BuildSummary:
        """Full violation summary for one build"""
        logger.info(f"Grabbing build violations for {build}")
        data = await self.get_json(
            "/api/v2/summary/build",
            params={"build_name": build.build_name, "build_number": build.build_number},
        )
        summary = parse_payload(BuildSummary, data or {}, "xray build summary")
        logger.info(f"Found {len(summary.issues or [])} issue(s) in build summary for {build}")
        return summary

    async def create_issue(self, issue_id: str, description: str, component_id: str) -> CreatedIssue:
        """Raise an internally-authored security issue against a component"""
        logger.info(f"Creating new issue in Xray on {component_id}: {issue_id}")
        now = datetime.now(timezone.utc).isoformat()
        issue = {
            "type": "security",
            "source_id": INTERNAL_SOURCE_ID,
            "created": now,
            "updated": now,
            "modified": now,
            "description": description,
            "provider": INTERNAL_PROVIDER.value,
            "severity": "critical",
            "summary": issue_id,
            "components": [
                {"component_id": f"{COMPONENT_ID_PREFIX}{component_id}"},
            ],
        }
        data = await self.post_json("/api/v1/events", issue)
        created = parse_payload(CreatedIssue, data, "xray created issue")
        logger.info(f"Created issue: {created.id}")
        return created

    async def scan_build(self, artifactory_id: str, build: BuildIdentity) -> List[Dict[str, Any]]:
        """Synchronously scan a build, returning the reported alerts"""
        params = {"token": self.token} if self.token else None
        payload = {
            "artifactoryId": artifactory_id,
            "buildName": build.build_name,
            "buildNumber": build.build_number,
        }
        logger.info(f"Scanning build {build} on {self.base_url}")
        data = await self.post_json("/scanBuild", payload, params=params)
        alerts = (data or {}).get("alerts") or []
        logger.info(f"Scan of {build} reported {len(alerts)} alert(s)")
        return alerts
