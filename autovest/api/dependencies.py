"""Dependency injection for FastAPI endpoints"""

from datetime import datetime

from fastapi import Request

from autovest.infrastructure.clients.prediction import PredictionClient
from autovest.utils.date_utils import utc_now


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_now() -> datetime:
    """Evaluation time for recency calculations; overridden in tests"""
    return utc_now()


def get_prediction_client() -> PredictionClient:
    """Provide prediction API client instance"""
    return PredictionClient()
