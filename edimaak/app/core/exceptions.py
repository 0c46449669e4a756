"""
Custom exceptions and error handlers for consistent error responses.

Provides standardized error codes and global exception handlers.
Matching and gateway errors are all recoverable at the caller.
"""

import logging
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from typing import Any, Dict, Optional

logger = logging.getLogger("edimaak.errors")


class AppException(Exception):
    """Base application exception."""
    
    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ParseError(AppException):
    """Raised when a date value is not a valid ISO-8601 calendar date."""
    
    def __init__(self, value: Any, field: str = "date", reason: Optional[str] = None):
        super().__init__(
            message=f"Invalid {field}: {reason or f'{value!r} is not a YYYY-MM-DD date'}",
            error_code="ERR_PARSE_001",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"field": field, "value": str(value)}
        )


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""
    
    def __init__(self, resource: str, resource_id: Any = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with ID {resource_id} not found"
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id}
        )


class UnauthorizedError(AppException):
    """Raised when the acting user is not allowed to act on a trip, request or match."""
    
    def __init__(self, message: str = "You are not a party allowed to perform this action", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="ERR_PERM_001",
            status_code=status.HTTP_403_FORBIDDEN,
            details=details
        )


class DuplicateMatchError(AppException):
    """Raised when a pending or accepted match already exists for the pair."""
    
    def __init__(self, trip_id: str, shipment_request_id: str):
        super().__init__(
            message="An active match already exists for this trip and shipment request",
            error_code="ERR_MATCH_001",
            status_code=status.HTTP_409_CONFLICT,
            details={"trip_id": trip_id, "shipment_request_id": shipment_request_id}
        )


class InvalidTransitionError(AppException):
    """Raised when a match status change is not an allowed transition."""
    
    def __init__(self, current: str, requested: str):
        super().__init__(
            message=f"Cannot move match from {current} to {requested}",
            error_code="ERR_MATCH_002",
            status_code=status.HTTP_409_CONFLICT,
            details={"current_status": current, "requested_status": requested}
        )


class ConcurrentModificationError(AppException):
    """Raised when the match status changed between read and write."""
    
    def __init__(self, match_id: str, expected: str):
        super().__init__(
            message="This match was already handled by someone else",
            error_code="ERR_MATCH_003",
            status_code=status.HTTP_409_CONFLICT,
            details={"match_id": match_id, "expected_status": expected}
        )


class IncompatibleMatchError(AppException):
    """Raised when proposing a match for a pair the classifier rejects."""
    
    def __init__(self, trip_id: str, shipment_request_id: str):
        super().__init__(
            message="This trip is not compatible with the shipment request",
            error_code="ERR_MATCH_004",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"trip_id": trip_id, "shipment_request_id": shipment_request_id}
        )


class InvalidListingError(AppException):
    """Raised when a trip or shipment request cannot take part in a new match."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="ERR_MATCH_005",
            status_code=status.HTTP_409_CONFLICT,
            details=details
        )


class TransientGatewayError(AppException):
    """Raised when an idempotent read still fails after all retries."""
    
    def __init__(self, operation: str, attempts: int):
        super().__init__(
            message=f"{operation} is temporarily unavailable",
            error_code="ERR_GATEWAY_001",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details={"operation": operation, "attempts": attempts}
        )


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    logger.info("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for FastAPI HTTPException with standardized format."""
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        401: "ERR_UNAUTHORIZED",
        403: "ERR_FORBIDDEN",
        404: "ERR_NOT_FOUND",
        409: "ERR_CONFLICT",
        500: "ERR_INTERNAL_SERVER"
    }
    
    error_code = error_code_map.get(exc.status_code, "ERR_UNKNOWN")
    
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": exc.detail,
            "details": {}
        },
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "ERR_VALIDATION",
            "message": "Validation error",
            "details": {
                "errors": [
                    {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                    for err in exc.errors()
                ]
            }
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "ERR_INTERNAL_SERVER",
            "message": "An internal server error occurred",
            "details": {}
        }
    )
