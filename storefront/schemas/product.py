# storefront/schemas/product.py
import uuid
from datetime import datetime
from typing import Literal

from storefront.schemas.common import APIModel, Envelope

CategoryName = Literal["Men", "Women", "Kids"]
SizeCode = Literal["S", "M", "L", "XL"]

# Query-side category; "All" disables the filter
CategoryFilter = Literal["All", "Men", "Women", "Kids"]


class ProductRead(APIModel):
    """
    Product representation for clients.
    """

    id: uuid.UUID
    name: str
    description: str
    price: float
    image_url: str
    category: CategoryName
    sizes: list[SizeCode]
    stock: int
    created_at: datetime
    updated_at: datetime


class ProductPage(Envelope[list[ProductRead]]):
    """
    One page of catalog search results.

    - count: items on this page
    - total: items matching the filters
    - pages: ceil(total / limit)
    """

    count: int
    total: int
    page: int
    pages: int
