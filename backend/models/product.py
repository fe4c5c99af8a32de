# backend/models/product.py
from sqlalchemy import Column, Integer, String, Text, Boolean, Float, DateTime, ForeignKey, JSON, CheckConstraint, func
from database import Base

# Catalog entry shown on the storefront.
# `category` is the display name; `category_id` links it to a Category row
# when the name matches one. `price` is free text ("Contact for Quote").
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=False)

    category = Column(String, nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)

    price = Column(String, nullable=False, default="")
    images = Column(JSON, nullable=False, default=list)
    # [{"key": ..., "value": ...}]
    specifications = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)

    featured = Column(Boolean, nullable=False, default=False, index=True)
    visible = Column(Boolean, nullable=False, default=True, index=True)
    rating = Column(Float, CheckConstraint("rating >= 0 AND rating <= 5"), nullable=False, default=0)

    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
