# storefront/routers/products.py
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlmodel import Session

from storefront.database import get_session
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.common import Envelope
from storefront.schemas.product import (
    CategoryFilter,
    ProductPage,
    ProductRead,
    SizeCode,
)
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


@router.get("", response_model=ProductPage)
def list_products(
    request: Request,
    session: Session = Depends(get_session),
    search: str | None = None,
    category: CategoryFilter | None = None,
    size: SizeCode | None = None,
    min_price: float | None = Query(default=None, alias="minPrice", ge=0),
    max_price: float | None = Query(default=None, alias="maxPrice", ge=0),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
):
    """
    Search the catalog.

    - Public endpoint.
    - Newest products first; `category=All` disables the category filter.
    - `limit` defaults to DEFAULT_PAGE_LIMIT and may not exceed MAX_PAGE_LIMIT.
    """
    settings = request.app.state.settings
    if limit is None:
        limit = settings.DEFAULT_PAGE_LIMIT
    if limit > settings.MAX_PAGE_LIMIT:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"limit must be at most {settings.MAX_PAGE_LIMIT}",
        )

    return service.search(
        session,
        search=search,
        category=category,
        size=size,
        min_price=min_price,
        max_price=max_price,
        page=page,
        limit=limit,
    )


@router.get("/{product_id}", response_model=Envelope[ProductRead])
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get a single product by id.
    """
    product = service.get_product(session, product_id)
    return Envelope[ProductRead](data=ProductRead.model_validate(product))
