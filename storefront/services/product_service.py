# storefront/services/product_service.py
import math
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from storefront.models.product import Product
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import ProductPage, ProductRead


class ProductService:
    """
    Catalog queries: filtered/paginated search and lookup by id.
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def search(
        self,
        session: Session,
        *,
        search: str | None = None,
        category: str | None = None,
        size: str | None = None,
        min_price: float | None = None,
        max_price: float | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> ProductPage:
        """
        Search the catalog, newest products first.

        Rules:
          - every filter is optional; category "All" means no filter
          - min/max price bounds are inclusive
          - a page past the end is empty but keeps total/pages
        """
        if category == "All":
            category = None

        filters = {
            "search": search.strip() if search else None,
            "category": category,
            "size": size,
            "min_price": min_price,
            "max_price": max_price,
        }

        total = self.repo.count(session, **filters)
        products = self.repo.search(
            session,
            skip=(page - 1) * limit,
            limit=limit,
            **filters,
        )

        return ProductPage(
            data=[ProductRead.model_validate(p) for p in products],
            count=len(products),
            total=total,
            page=page,
            pages=math.ceil(total / limit),
        )

    def get_product(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product
