"""
Main FastAPI application entry point for the Customer Service
This file sets up the FastAPI application with configuration, middleware,
error mapping and the customer endpoints. It serves as the entry point for
both local development (uvicorn) and AWS Lambda deployment (Mangum).
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from config import settings
from database import db_manager
from exceptions import (
    CustomerAlreadyExistsError,
    CustomerAuthenticationError,
    CustomerError,
    CustomerInactiveError,
    CustomerNotFoundError,
    InvalidCustomerDataError,
)
from schemas.customer import CreateCustomerRequest, CustomerResponse, ErrorResponse, UpdateCustomerRequest
from services.customer_service import CustomerService, customer_service

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Domain error -> (HTTP status, stable error code)
ERROR_MAPPING = {
    CustomerNotFoundError: (404, "CUSTOMER_NOT_FOUND"),
    CustomerAlreadyExistsError: (409, "CUSTOMER_ALREADY_EXISTS"),
    CustomerInactiveError: (403, "CUSTOMER_INACTIVE"),
    InvalidCustomerDataError: (400, "INVALID_CUSTOMER_DATA"),
    CustomerAuthenticationError: (401, "AUTHENTICATION_FAILED"),
}

# Create FastAPI application instance
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    debug=settings.DEBUG
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


def get_customer_service() -> CustomerService:
    """Dependency provider, overridden in tests"""
    return customer_service


def _validation_response(request: Request, errors) -> JSONResponse:
    logger.warning(f"Validation error for {request.url}: {errors}")

    error_details = []
    for error in errors:
        error_details.append({
            "field": " -> ".join(str(x) for x in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        })

    error_response = ErrorResponse(
        error="VALIDATION_ERROR",
        message="Request validation failed",
        details={"errors": error_details}
    )
    return JSONResponse(status_code=400, content=error_response.model_dump(mode="json"))


# Exception handlers
@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request body and path validation errors"""
    return _validation_response(request, exc.errors())


@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised outside request parsing"""
    return _validation_response(request, exc.errors())


@app.exception_handler(CustomerError)
async def customer_exception_handler(request: Request, exc: CustomerError):
    """Map domain errors to their status code and error code"""
    status_code, error_code = ERROR_MAPPING.get(type(exc), (400, "CUSTOMER_ERROR"))
    logger.warning(f"{error_code} for {request.method} {request.url.path}: {exc}")

    error_response = ErrorResponse(error=error_code, message=str(exc))
    return JSONResponse(status_code=status_code, content=error_response.model_dump(mode="json"))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors without leaking internals"""
    logger.error(f"Unexpected error for {request.url}: {exc}")
    logger.error(f"Traceback: {traceback.format_exc()}")

    error_response = ErrorResponse(
        error="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred"
    )
    return JSONResponse(status_code=500, content=error_response.model_dump(mode="json"))


@app.get("/")
async def root():
    """
    Root endpoint that returns basic API information
    """
    return {
        "message": "Customer Service API is running",
        "version": settings.API_VERSION,
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer health checks
    """
    db_connected = await db_manager.test_connection()
    return {
        "status": "healthy" if db_connected else "degraded",
        "environment": settings.ENVIRONMENT,
        "version": settings.API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "lambda": settings.is_lambda_environment(),
        "database": {"status": "connected" if db_connected else "disconnected"}
    }


router = APIRouter(prefix=settings.API_PREFIX, tags=["Customer Management"])


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    request: CreateCustomerRequest,
    service: CustomerService = Depends(get_customer_service)
):
    """
    Create a new customer

    Persists the person record first, then the client record keyed by the
    generated id. Responds 409 if the identification is already registered.
    """
    logger.info(f"REST request to create customer: {request.name}")
    return await service.create_customer(request)


@router.get("", response_model=List[CustomerResponse])
async def list_customers(service: CustomerService = Depends(get_customer_service)):
    """List every customer (an empty list is a valid result)"""
    customers = await service.find_all_customers()
    logger.info(f"Retrieved {len(customers)} customers")
    return customers


@router.get("/identification/{identification}", response_model=CustomerResponse)
async def get_customer_by_identification(
    identification: str,
    service: CustomerService = Depends(get_customer_service)
):
    logger.info(f"REST request to get customer by identification: {identification}")
    return await service.find_customer_by_identification(identification)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service)
):
    logger.info(f"REST request to get customer by ID: {customer_id}")
    return await service.find_customer_by_id(customer_id)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    request: UpdateCustomerRequest,
    service: CustomerService = Depends(get_customer_service)
):
    """
    Partial update: only the fields sent are changed
    identification is immutable and rejected if present
    """
    logger.info(f"REST request to update customer with ID: {customer_id}")
    return await service.update_customer(customer_id, request)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service)
):
    """Soft delete: the customer is deactivated, nothing is removed"""
    logger.info(f"REST request to deactivate customer with ID: {customer_id}")
    await service.delete_customer(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{customer_id}/hard", status_code=status.HTTP_204_NO_CONTENT)
async def hard_delete_customer(
    customer_id: int,
    service: CustomerService = Depends(get_customer_service)
):
    """Hard delete: removes the client and person records permanently"""
    logger.warning(f"REST request to HARD DELETE customer with ID: {customer_id}")
    await service.hard_delete_customer(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


app.include_router(router)


# This is the proper way to run the application using uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=1
    )
