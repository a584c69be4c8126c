# backend/xrayfix/schemas/violation.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from xrayfix.core.constants import INTERNAL_PROVIDER


class InfectedFile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    display_name: str


class ImpactedArtifact(BaseModel):
    """One build occurrence, display name ``<buildName>:<buildNumber>``"""
    model_config = ConfigDict(frozen=True, extra="ignore")

    display_name: str
    infected_files: List[InfectedFile] = []


class IssueCve(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    cve: Optional[str] = None


class ViolationIssue(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    summary: str
    description: str = ""
    provider: Optional[str] = None
    impacted_artifacts: List[ImpactedArtifact] = []
    cves: Optional[List[IssueCve]] = None

    @property
    def is_internal(self) -> bool:
        return self.provider == INTERNAL_PROVIDER


class Violation(BaseModel):
    """Inbound Xray violation event"""
    model_config = ConfigDict(frozen=True, extra="ignore")

    issues: List[ViolationIssue] = Field(min_length=1)

    def build_ids(self) -> List[str]:
        """Distinct impacted build display names, in first-seen order"""
        seen: List[str] = []
        for issue in self.issues:
            for artifact in issue.impacted_artifacts:
                if artifact.display_name not in seen:
                    seen.append(artifact.display_name)
        return seen
