# backend/xrayfix/api/dependencies.py
import hashlib
import hmac
from typing import Optional

from fastapi import HTTPException, Request, status

from xrayfix.core.config import settings
from xrayfix.remediation import IssueNotifier, RemediationOrchestrator
from xrayfix.scanners import PluginManager
from xrayfix.services import ServiceContainer
from xrayfix.vcs.github import GitHubProjectLoader


def build_orchestrator(services: ServiceContainer) -> RemediationOrchestrator:
    return RemediationOrchestrator(
        xray=services.xray,
        artifactory=services.artifactory,
        graph=services.graph,
        loader=GitHubProjectLoader(services.github),
        cache=services.cache,
        notifier=IssueNotifier(services.artifactory, services.graph, services.chat),
    )


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_orchestrator(request: Request) -> RemediationOrchestrator:
    return request.app.state.orchestrator


def get_plugin_manager(request: Request) -> PluginManager:
    return request.app.state.plugin_manager


def verify_signature(body: bytes, signature: Optional[str], secret: Optional[str] = None) -> None:
    """Check an ``sha256=<hex>`` HMAC of the raw body when a webhook secret is configured"""
    secret = secret if secret is not None else settings.XRAY_WEBHOOK_SECRET
    if not secret:
        return

    if not signature:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing signature")

    expected_signature = "sha256=" + hmac.new(
        secret.encode(),
        body,
        hashlib.sha256
    ).hexdigest()

    if not hmac.compare_digest(signature, expected_signature):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid signature")
