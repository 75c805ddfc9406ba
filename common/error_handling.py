"""
Standardized error responses for the payment service
"""
from typing import Optional, Dict, Any
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
import logging
import traceback
import time

logger = logging.getLogger(__name__)

class ErrorDetail(BaseModel):
    """Detailed error information"""
    code: str
    message: str
    field: Optional[str] = None
    context: Optional[Dict[str, Any]] = None

class StandardErrorResponse(BaseModel):
    """Standard error response format"""
    success: bool = False
    error: ErrorDetail
    timestamp: float
    request_id: Optional[str] = None

class ErrorCodes:
    """Standard error codes"""
    # Caller errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    PAYMENT_NOT_FOUND = "PAYMENT_NOT_FOUND"

    # Infrastructure failures
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    DATABASE_ERROR = "DATABASE_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"

HTTP_STATUS = {
    ErrorCodes.VALIDATION_ERROR: 400,
    ErrorCodes.INVALID_INPUT: 400,
    ErrorCodes.PAYMENT_NOT_FOUND: 404,
    ErrorCodes.INTERNAL_SERVER_ERROR: 500,
    ErrorCodes.SERVICE_UNAVAILABLE: 503,
    ErrorCodes.DATABASE_ERROR: 503,
    ErrorCodes.EXTERNAL_SERVICE_ERROR: 502,
    ErrorCodes.TIMEOUT_ERROR: 504,
}

class BusinessLogicError(Exception):
    """The request cannot be processed as submitted"""
    def __init__(self, code: str, message: str, field: str = None, context: Dict[str, Any] = None):
        self.code = code
        self.message = message
        self.field = field
        self.context = context or {}
        super().__init__(message)

class ServiceError(Exception):
    """A collaborator (database, bank) could not complete the call"""
    def __init__(self, code: str, message: str, original_error: Exception = None):
        self.code = code
        self.message = message
        self.original_error = original_error
        super().__init__(message)

def create_error_response(
    error_code: str,
    message: str,
    status_code: int = 500,
    field: str = None,
    context: Dict[str, Any] = None,
    request_id: str = None
) -> JSONResponse:
    """Create standardized error response"""
    body = StandardErrorResponse(
        error=ErrorDetail(code=error_code, message=message, field=field, context=context),
        timestamp=time.time(),
        request_id=request_id
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())

def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")

async def business_logic_exception_handler(request: Request, exc: BusinessLogicError):
    request_id = _request_id(request)
    logger.warning(f"Business logic error: {exc.code} - {exc.message}", extra={
        "error_code": exc.code,
        "request_id": request_id,
        "field": exc.field,
    })
    return create_error_response(
        exc.code, exc.message, HTTP_STATUS.get(exc.code, 400),
        field=exc.field, context=exc.context, request_id=request_id
    )

async def service_exception_handler(request: Request, exc: ServiceError):
    request_id = _request_id(request)
    logger.error(f"Service error: {exc.code} - {exc.message}", extra={
        "error_code": exc.code,
        "request_id": request_id,
        "original_error": str(exc.original_error) if exc.original_error else None
    })
    return create_error_response(exc.code, exc.message, HTTP_STATUS.get(exc.code, 500), request_id=request_id)

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first invalid field of a request body"""
    request_id = _request_id(request)
    first_error = exc.errors()[0]
    field = ".".join(str(loc) for loc in first_error.get("loc", []))
    message = first_error.get("msg", "Validation error")

    logger.warning(f"Validation error: {message} on field {field}", extra={"request_id": request_id})
    return create_error_response(
        ErrorCodes.VALIDATION_ERROR,
        f"Validation error on field '{field}': {message}",
        400,
        field=field,
        request_id=request_id
    )

async def http_exception_handler(request: Request, exc: HTTPException):
    status_to_code = {code_status: code for code, code_status in HTTP_STATUS.items()}
    status_to_code[400] = ErrorCodes.INVALID_INPUT
    status_to_code[503] = ErrorCodes.SERVICE_UNAVAILABLE
    error_code = status_to_code.get(exc.status_code, ErrorCodes.INTERNAL_SERVER_ERROR)

    logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")
    return create_error_response(error_code, str(exc.detail), exc.status_code, request_id=_request_id(request))

async def general_exception_handler(request: Request, exc: Exception):
    request_id = _request_id(request)
    logger.error(f"Unexpected error: {str(exc)}", extra={
        "request_id": request_id,
        "traceback": traceback.format_exc()
    })
    return create_error_response(
        ErrorCodes.INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again later.",
        500,
        request_id=request_id
    )

def add_error_handlers(app):
    """Add all error handlers to FastAPI app"""
    app.add_exception_handler(BusinessLogicError, business_logic_exception_handler)
    app.add_exception_handler(ServiceError, service_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
