"""
Inbound Xray violation events.

POST /api/v1/events/xray-violations runs the remediation pipeline for one
violation and reports its terminal outcome.
"""
import json

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from xrayfix.api.dependencies import get_orchestrator, verify_signature
from xrayfix.core.constants import OutcomeCode
from xrayfix.core.exceptions import PayloadError
from xrayfix.remediation import RemediationOrchestrator
from xrayfix.schemas import parse_payload
from xrayfix.schemas.violation import Violation

router = APIRouter()


@router.post("/xray-violations")
async def xray_violation_webhook(
    request: Request,
    orchestrator: RemediationOrchestrator = Depends(get_orchestrator),
):
    """Raise a PR when there are fixable violations"""
    body = await request.body()
    verify_signature(body, request.headers.get("X-Xray-Signature"))

    try:
        payload = json.loads(body)
    except ValueError as e:
        raise PayloadError(f"Violation event is not valid JSON: {e}") from e

    violation = parse_payload(Violation, payload, "violation event")
    outcome = await orchestrator.handle_violation(violation)

    status_code = (
        status.HTTP_502_BAD_GATEWAY if outcome.code == OutcomeCode.FAILURE else status.HTTP_200_OK
    )
    return JSONResponse(status_code=status_code, content=outcome.model_dump())
