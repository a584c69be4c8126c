# backend/xrayfix/schemas/command.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional


class CommandParameters(BaseModel):
    """Parameters shared by every chat command"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    component_id: str = Field(
        alias="componentId",
        max_length=100,
        pattern=r"^[^:\s]+:[^:\s]+:[^:\s]+$",
        description="the unique identifier of the component (group:artifact:version)",
    )
    issue_id: str = Field(alias="issueId", min_length=1, description="the unique identifier of the issue")
    issue_description: str = Field(alias="issueDescription", description="the description of the issue")

    def as_button_value(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


class CommandRequest(CommandParameters):
    response_url: Optional[str] = Field(default=None, alias="responseUrl")

    @property
    def parameters(self) -> CommandParameters:
        return CommandParameters(
            componentId=self.component_id,
            issueId=self.issue_id,
            issueDescription=self.issue_description,
        )


class CommandResponse(BaseModel):
    command: str
    success: bool
    message: Optional[Dict[str, Any]] = None
    detail: Optional[str] = None


class ScanGoalRequest(BaseModel):
    sha: str = Field(min_length=1)
    branch: str = Field(min_length=1)
