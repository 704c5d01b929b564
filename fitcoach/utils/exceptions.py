"""Custom exception classes and error handling utilities."""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from loguru import logger


class FitCoachException(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DatabaseError(FitCoachException):
    """Database operation errors."""
    pass


class ValidationError(FitCoachException):
    """Data validation errors."""
    pass


class NotFoundError(FitCoachException):
    """A referenced user, workout or exercise does not exist."""
    pass


class RewardError(FitCoachException):
    """Reward engine failures that are not caused by the caller's input."""
    pass


def handle_database_error(error: Exception) -> HTTPException:
    """Handle database errors and return appropriate HTTP response."""
    logger.error(f"Database error: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Database operation failed. Please try again later."
    )


def handle_validation_error(error: ValidationError) -> HTTPException:
    """Handle validation errors."""
    logger.warning(f"Validation error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={
            "message": error.message,
            "details": error.details
        }
    )


def handle_not_found_error(error: NotFoundError) -> HTTPException:
    """Handle lookups of missing entities."""
    logger.warning(f"Not found: {error.message}")
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error.message
    )


def handle_reward_error(error: RewardError) -> HTTPException:
    """Handle reward engine failures such as exhausted transaction retries."""
    logger.error(f"Reward error: {error.message}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Rewards are temporarily unavailable. Please try again."
    )


def to_http_exception(error: FitCoachException) -> HTTPException:
    """Map an application exception onto its HTTP representation."""
    if isinstance(error, ValidationError):
        return handle_validation_error(error)
    if isinstance(error, NotFoundError):
        return handle_not_found_error(error)
    if isinstance(error, RewardError):
        return handle_reward_error(error)
    return handle_database_error(error)
