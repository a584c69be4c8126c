# backend/xrayfix/scanners/__init__.py
from xrayfix.scanners.base import BaseScannerPlugin, ScanResult, ScanStatus
from xrayfix.scanners.plugin_manager import PluginManager
from xrayfix.scanners.xray_scanner import XrayScanner

__all__ = [
    "BaseScannerPlugin",
    "ScanResult",
    "ScanStatus",
    "PluginManager",
    "XrayScanner",
]
