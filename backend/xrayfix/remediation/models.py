from dataclasses import dataclass, field
from pydantic import BaseModel, ConfigDict
from typing import List, Optional

from xrayfix.core.constants import OutcomeCode, RemediationStage


@dataclass(frozen=True)
class FixEntry:
    """Recommended upgrade for a vulnerable coordinate"""
    id: Optional[str]
    summary: str
    fix_version: str


@dataclass
class Dependency:
    group: str
    artifact: str
    version: str
    fixes: List[FixEntry] = field(default_factory=list)

    @property
    def coordinate(self) -> str:
        return f"{self.group}:{self.artifact}:{self.version}"

    @property
    def key(self) -> str:
        return f"{self.group}:{self.artifact}"


@dataclass
class BuildFile:
    path: str
    dependencies: List[Dependency] = field(default_factory=list)

    def fixable(self) -> List[Dependency]:
        return [d for d in self.dependencies if d.fixes]


class RemediationOutcome(BaseModel):
    """Terminal state of one remediation attempt"""
    model_config = ConfigDict(use_enum_values=True)

    code: OutcomeCode
    message: str
    stage: Optional[RemediationStage] = None
    build_id: Optional[str] = None
    pull_request_url: Optional[str] = None

    @classmethod
    def success(cls, message: str, **kwargs) -> "RemediationOutcome":
        return cls(code=OutcomeCode.SUCCESS, message=message, **kwargs)

    @classmethod
    def noop(cls, message: str, **kwargs) -> "RemediationOutcome":
        return cls(code=OutcomeCode.NOOP, message=message, **kwargs)

    @classmethod
    def failure(cls, stage: RemediationStage, message: str, **kwargs) -> "RemediationOutcome":
        return cls(code=OutcomeCode.FAILURE, stage=stage, message=message, **kwargs)

    @property
    def succeeded(self) -> bool:
        return self.code != OutcomeCode.FAILURE
