"""Dependency injection for FastAPI endpoints"""

from typing import List
from fastapi import Request
from copilot_engine.domain.consolidation import DEFAULT_CONSOLIDATION_OPTIONS
from copilot_engine.domain.models import ConsolidationOption


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_default_consolidation_options() -> List[ConsolidationOption]:
    """Provide seed consolidation offers used when the caller has none"""
    return list(DEFAULT_CONSOLIDATION_OPTIONS)
