from pydantic import ConfigDict, Field
from typing import Optional, List
from datetime import datetime

from schemas.base import ORMBase
from schemas.product import ProductResponse


# Names and descriptions arrive trimmed; blank values are rejected
class CategoryCreate(ORMBase):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    image: Optional[str] = None
    is_active: bool = True


class CategoryUpdate(ORMBase):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = None
    is_active: Optional[bool] = None


class CategoryResponse(ORMBase):
    id: int
    name: str
    description: str
    image: Optional[str] = None
    is_active: bool
    product_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CategoryEnvelope(ORMBase):
    success: bool = True
    category: CategoryResponse


class CategoryListEnvelope(ORMBase):
    success: bool = True
    categories: List[CategoryResponse]


class CategoryRef(ORMBase):
    id: int
    name: str
    description: str


class CategoryProductsPage(ORMBase):
    success: bool = True
    category: CategoryRef
    products: List[ProductResponse]
    total: int
    limit: int
    skip: int
