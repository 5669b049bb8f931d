from __future__ import annotations  # Interview client package exports

from .api import BACKEND_UNREACHABLE, BackendClient, is_failure, is_unreachable
from .app import BACKEND_DOWN_NOTICE, REQUEST_FAILED_NOTICE, InterviewApp, Message

__all__ = [
    "BACKEND_DOWN_NOTICE",
    "BACKEND_UNREACHABLE",
    "BackendClient",
    "InterviewApp",
    "Message",
    "REQUEST_FAILED_NOTICE",
    "is_failure",
    "is_unreachable",
]
