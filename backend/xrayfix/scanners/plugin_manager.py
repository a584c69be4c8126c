# backend/xrayfix/scanners/plugin_manager.py
from typing import Dict, List, Optional

from xrayfix.scanners.base import BaseScannerPlugin
from xrayfix.scanners.xray_scanner import XrayScanner
from xrayfix.core.logging import logger


class PluginManager:
    """Manager for scanner plugins"""

    def __init__(self, scanners: Optional[List[BaseScannerPlugin]] = None):
        self._plugins: Dict[str, BaseScannerPlugin] = {}
        self._scanners = scanners
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize all registered plugins"""
        if self._initialized:
            return

        logger.info("Initializing scanner plugins")

        scanners = self._scanners if self._scanners is not None else [XrayScanner()]

        for scanner in scanners:
            await scanner.initialize()
            self._plugins[scanner.name] = scanner
            logger.info(f"Registered scanner: {scanner.name} v{scanner.version}")

        self._initialized = True

    async def get_scanner(self, scanner_type: str) -> Optional[BaseScannerPlugin]:
        """Get scanner plugin by type, e.g. ``xray``"""
        return self._plugins.get(f"{scanner_type}_scanner")

    async def cleanup_all(self) -> None:
        """Cleanup all plugins"""
        for plugin in self._plugins.values():
            await plugin.cleanup()
