"""Dependency injection for FastAPI endpoints"""

import re
from datetime import datetime, timezone
from fastapi import HTTPException, Request

ACCOUNT_ID_PATTERN = re.compile(r"^[a-fA-F0-9]{24}$")


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_reference_time() -> datetime:
    """Instant the scoring window is anchored to; overridden in tests"""
    return datetime.now(timezone.utc)


def valid_account_id(account_id: str) -> str:
    """Reject path identifiers that are not 24 hex characters"""
    if not ACCOUNT_ID_PATTERN.match(account_id):
        raise HTTPException(status_code=400, detail="Invalid account ID format")
    return account_id
