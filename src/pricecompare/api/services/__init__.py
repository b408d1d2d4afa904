"""API services for business logic."""

from .comparison_service import ComparisonService

__all__ = ["ComparisonService"]
