"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request

from forecast_engine.config import Settings, settings
from forecast_engine.domain.priority import ClassificationPolicies, policies_from_settings


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide application settings"""
    return settings


def get_policies(config: Settings = Depends(get_settings)) -> ClassificationPolicies:
    """Provide priority classification policies built from settings"""
    return policies_from_settings(config)
