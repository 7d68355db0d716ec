"""AMO API client and upload workflow."""

from .api import AmoApi
from .model import Credentials, Upload, Version, VersionRequest
from .workflow import UpdateAddonParams, await_validation, update_addon

__all__ = [
    "AmoApi",
    "Credentials",
    "UpdateAddonParams",
    "Upload",
    "Version",
    "VersionRequest",
    "await_validation",
    "update_addon",
]
