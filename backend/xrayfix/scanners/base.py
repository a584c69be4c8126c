# backend/xrayfix/scanners/base.py
from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
from enum import Enum


class ScanStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ScanResult:
    status: ScanStatus
    findings: List[Dict[str, Any]]
    summary: Dict[str, Any]
    metadata: Dict[str, Any]
    progress: List[str] = field(default_factory=list)
    error: Optional[str] = None


class BaseScannerPlugin(ABC):
    """Abstract base class for scanner plugins run as a delivery goal"""

    name: str
    version: str
    description: str
    display_name: str
    working_description: str
    completed_description: str
    failed_description: str

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize scanner plugin"""
        pass

    @abstractmethod
    async def scan(
        self,
        target: str,
        scan_id: str,
        options: Optional[Dict[str, Any]] = None
    ) -> ScanResult:
        """Execute scan on target"""
        pass

    async def cleanup(self) -> None:
        """Cleanup resources after scan"""
        pass
