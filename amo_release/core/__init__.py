"""Core types shared by every layer."""

from .errors import PluginError, PluginErrorKind, PluginFailure, PluginFailures
from .result import Err, Ok, Result

__all__ = [
    # errors
    "PluginError",
    "PluginErrorKind",
    "PluginFailure",
    "PluginFailures",
    # result
    "Err",
    "Ok",
    "Result",
]
