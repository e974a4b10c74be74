from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from customer_service.api.dependencies import get_app_settings, get_customer_handler
from customer_service.core.config import Settings
from customer_service.core.exceptions import NotFoundError, ValidationException
from customer_service.domain.schemas.customer import (
    CreateCustomerRequestV2,
    CustomerResponseV2,
    UpdateCustomerRequestV2,
)
from customer_service.domain.schemas.envelope import ResponseEnvelope
from customer_service.services.customer_handler import CustomerHandler

router = APIRouter(prefix="/customers", tags=["customers v2"])


@router.get(
    "",
    response_model=ResponseEnvelope[CustomerResponseV2],
    summary="Get customers (paged)"
)
async def get_customers(
    page: Optional[int] = Query(None, ge=1),
    page_size: Optional[int] = Query(None, ge=1, alias="pageSize"),
    settings: Settings = Depends(get_app_settings),
    handler: CustomerHandler = Depends(get_customer_handler)
):
    """Gets one page of customers."""
    page = page or settings.DEFAULT_PAGE
    page_size = page_size or settings.DEFAULT_PAGE_SIZE
    if page_size > settings.MAX_PAGE_SIZE:
        raise ValidationException(
            detail=f"pageSize must not exceed {settings.MAX_PAGE_SIZE}",
            field="pageSize"
        )
    return await handler.get_customers_v2(page, page_size)


@router.get(
    "/{customer_id}",
    response_model=ResponseEnvelope[CustomerResponseV2],
    summary="Get customer by ID"
)
async def get_customer_by_id(
    customer_id: int = Path(..., gt=0),
    handler: CustomerHandler = Depends(get_customer_handler)
):
    """Gets one customer. An unknown ID yields an envelope with empty data."""
    return await handler.get_customer_by_id_v2(customer_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create customers"
)
async def create_customers(
    requests: List[CreateCustomerRequestV2],
    handler: CustomerHandler = Depends(get_customer_handler)
) -> Response:
    """Creates a batch of customers. The v2 contract has no phone."""
    await handler.post_customers_v2(requests)
    return Response(status_code=status.HTTP_201_CREATED)


@router.patch(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update customer"
)
async def update_customer(
    request: UpdateCustomerRequestV2,
    handler: CustomerHandler = Depends(get_customer_handler)
) -> Response:
    """Updates the fields present in the request, keeping the rest."""
    if not await handler.update_customer_v2(request):
        raise NotFoundError("Customer", request.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
