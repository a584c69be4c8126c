"""Xray violation remediation and Artifactory download controls."""

__version__ = "1.0.0"
