"""
Delivery goals.

POST /api/v1/goals/xray-scan scans the build produced by a pushed commit.
"""
import uuid
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from xrayfix.api.dependencies import get_plugin_manager
from xrayfix.scanners import PluginManager, ScanStatus
from xrayfix.schemas.command import ScanGoalRequest

router = APIRouter()


@router.post("/xray-scan")
async def xray_scan_goal(
    request: ScanGoalRequest,
    plugin_manager: PluginManager = Depends(get_plugin_manager),
):
    scanner = await plugin_manager.get_scanner("xray")
    if scanner is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Xray scanner not registered")

    result = await scanner.scan(
        target=request.sha,
        scan_id=str(uuid.uuid4()),
        options={"branch": request.branch},
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if result.status == ScanStatus.COMPLETED else status.HTTP_502_BAD_GATEWAY,
        content=asdict(result),
    )
