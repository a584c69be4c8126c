from fastapi import APIRouter
from xrayfix.api.v1 import commands, events, goals

api_router = APIRouter()

api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(commands.router, tags=["commands"])
api_router.include_router(goals.router, prefix="/goals", tags=["goals"])
