# backend/schemas/product.py
from pydantic import ConfigDict, Field
from typing import Optional, List, Any, Dict
from datetime import datetime

from schemas.base import ORMBase


class ProductSpecification(ORMBase):
    key: str
    value: str


# Shared base attributes for product entities
class ProductBase(ORMBase):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: str = ""
    images: List[str] = Field(default_factory=list)
    specifications: List[ProductSpecification] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    featured: bool = False
    visible: bool = True


# Schema for creating a new product
class ProductCreate(ProductBase):
    pass


# Schema for partial product updates
class ProductUpdate(ORMBase):
    """All fields optional; only the ones sent are applied."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    price: Optional[str] = None
    images: Optional[List[str]] = None
    specifications: Optional[List[ProductSpecification]] = None
    tags: Optional[List[str]] = None
    featured: Optional[bool] = None
    visible: Optional[bool] = None
    rating: Optional[float] = Field(None, ge=0, le=5)


# Full product representation including ID
class ProductResponse(ProductBase):
    id: int
    category_id: Optional[int] = None
    rating: float = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductList(ORMBase):
    products: List[ProductResponse]
    total: int


class ProductSearchResult(ProductList):
    query: Dict[str, Any]


class ProductCategoryNames(ORMBase):
    categories: List[str]
