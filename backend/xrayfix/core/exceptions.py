# backend/xrayfix/core/exceptions.py
from typing import Optional


class XrayFixError(Exception):
    """Base class for all errors raised by xrayfix"""


class RemoteCallError(XrayFixError):
    """An outbound call failed, timed out or returned a non-2xx status"""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None):
        self.service = service
        self.message = message
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class BuildIdentifierError(XrayFixError, ValueError):
    """A build identifier did not match the expected grammar"""


class PayloadError(XrayFixError, ValueError):
    """An inbound or upstream payload broke its data contract"""


class BuildFileNotFoundError(XrayFixError):
    """A build descriptor that was enumerated could not be located in the project"""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Could not find file: {path} in project")


class DependencyNotFoundError(XrayFixError):
    """A dependency extracted from a file matched none of the rewrite patterns"""

    def __init__(self, path: str, coordinate: str):
        self.path = path
        self.coordinate = coordinate
        super().__init__(f"No declaration of {coordinate} left to update in {path}")
