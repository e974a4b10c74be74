from typing import List

from fastapi import APIRouter, Depends, Path, Response, status

from customer_service.api.dependencies import get_customer_handler
from customer_service.core.exceptions import NotFoundError
from customer_service.domain.schemas.customer import (
    CreateCustomerRequest,
    CustomerResponse,
    UpdateCustomerRequest,
)
from customer_service.domain.schemas.envelope import ResponseEnvelope
from customer_service.services.customer_handler import CustomerHandler

router = APIRouter(prefix="/customers", tags=["customers v1"])


@router.get(
    "",
    response_model=ResponseEnvelope[CustomerResponse],
    summary="Get customers"
)
async def get_customers(
    handler: CustomerHandler = Depends(get_customer_handler)
):
    """Gets every customer."""
    return await handler.get_customers_v1()


@router.get(
    "/{customer_id}",
    response_model=ResponseEnvelope[CustomerResponse],
    summary="Get customer by ID"
)
async def get_customer_by_id(
    customer_id: int = Path(..., gt=0),
    handler: CustomerHandler = Depends(get_customer_handler)
):
    """Gets one customer. An unknown ID yields an envelope with empty data."""
    return await handler.get_customer_by_id_v1(customer_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create customers"
)
async def create_customers(
    requests: List[CreateCustomerRequest],
    handler: CustomerHandler = Depends(get_customer_handler)
) -> Response:
    """Creates a batch of customers in a single all-or-nothing call."""
    await handler.post_customers_v1(requests)
    return Response(status_code=status.HTTP_201_CREATED)


@router.put(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Replace customer"
)
async def update_customer(
    request: UpdateCustomerRequest,
    handler: CustomerHandler = Depends(get_customer_handler)
) -> Response:
    """Replaces every field of an existing customer."""
    if not await handler.update_customer_v1(request):
        raise NotFoundError("Customer", request.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete customer"
)
async def delete_customer(
    customer_id: int = Path(..., gt=0),
    handler: CustomerHandler = Depends(get_customer_handler)
) -> Response:
    """Deletes an existing customer."""
    if not await handler.delete_customer_v1(customer_id):
        raise NotFoundError("Customer", customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
