# backend/xrayfix/schemas/summary.py
"""Xray build summary (``/api/v2/summary/build``) and scan responses"""
from pydantic import BaseModel, ConfigDict, field_validator
from typing import Any, Dict, List, Optional


class SummaryComponent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    component_id: str
    fixed_versions: List[str] = []

    @field_validator("fixed_versions", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []


class SummaryCve(BaseModel):
    model_config = ConfigDict(extra="ignore")

    cve: Optional[str] = None


class SummaryIssue(BaseModel):
    model_config = ConfigDict(extra="ignore")

    issue_id: Optional[str] = None
    summary: str = ""
    description: Optional[str] = None
    severity: Optional[str] = None
    components: Optional[List[SummaryComponent]] = None
    cves: List[SummaryCve] = []

    @field_validator("cves", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return v or []

    @property
    def vulnerability_id(self) -> Optional[str]:
        """First associated CVE, falling back to the Xray issue id"""
        for cve in self.cves:
            if cve.cve:
                return cve.cve
        return self.issue_id


class BuildSummary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    build: Optional[Dict[str, Any]] = None
    issues: Optional[List[SummaryIssue]] = None


class CreatedIssue(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
