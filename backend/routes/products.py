# backend/routes/products.py
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from utils.sessions import require_admin
from utils.audit import write_log, client_ip
from utils.storage_policy import read_with_policy, FailClosed, DegradeToSample
from utils.catalog_samples import sample_product_list, sample_product
from models.users import User
from models.product import Product
from models.category import Category
import schemas.product as product_schemas

router = APIRouter(prefix="/products", tags=["Products"])


# ---- HELPERS ----
def resolve_category(db: Session, name: str) -> Tuple[str, Optional[int]]:
    """Match a category name case-insensitively; unknown names stay free text."""
    name = name.strip()
    category = db.query(Category).filter(func.lower(Category.name) == name.lower()).first()
    if category:
        return category.name, category.id
    return name, None


def visible_products(db: Session):
    return db.query(Product).filter(Product.visible.is_(True))


def _list_policy():
    if settings.CATALOG_SAMPLE_FALLBACK:
        return DegradeToSample(sample_product_list)
    return FailClosed()


def _sample_or_404(product_id: int):
    def _lookup():
        product = sample_product(product_id)
        if product is None:
            raise HTTPException(status_code=404, detail="Product not found")
        return product
    return _lookup


# =========================
# PRODUCT LIST
# =========================
@router.get("", response_model=product_schemas.ProductList)
def list_products(db: Session = Depends(get_db)):
    def _read():
        products = visible_products(db).order_by(Product.created_at.desc(), Product.id.desc()).all()
        return {"products": products, "total": len(products)}

    return read_with_policy(db, _list_policy(), _read, what="products")


@router.get("/search", response_model=product_schemas.ProductSearchResult)
def search_products(
    q: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    featured: Optional[bool] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    def _read():
        query = visible_products(db)
        if q:
            like = f"%{q}%"
            query = query.filter(or_(Product.name.ilike(like), Product.description.ilike(like)))
        if category and category != "all":
            query = query.filter(func.lower(Product.category) == category.lower())
        if featured is not None:
            query = query.filter(Product.featured.is_(featured))
        return query.order_by(Product.created_at.desc(), Product.id.desc()).limit(limit).all()

    products = read_with_policy(db, FailClosed(), _read, what="product search")
    return {
        "products": products,
        "total": len(products),
        "query": {"q": q, "category": category, "featured": featured, "limit": limit},
    }


@router.get("/categories", response_model=product_schemas.ProductCategoryNames)
def get_product_categories(db: Session = Depends(get_db)):
    def _read():
        return (
            db.query(Product.category)
            .filter(Product.visible.is_(True), Product.category != None, Product.category != "")  # noqa: E711
            .distinct()
            .all()
        )

    values = read_with_policy(db, FailClosed(), _read, what="product categories")
    return {"categories": sorted(v[0] for v in values)}


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/{product_id}", response_model=product_schemas.ProductResponse)
def get_product(product_id: int, db: Session = Depends(get_db)):
    def _read():
        product = db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    policy = DegradeToSample(_sample_or_404(product_id)) if settings.CATALOG_SAMPLE_FALLBACK else FailClosed()
    return read_with_policy(db, policy, _read, what=f"product {product_id}")


# =========================
# CREATE
# =========================
@router.post("", response_model=product_schemas.ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: product_schemas.ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    data = payload.model_dump()
    data["category"], data["category_id"] = resolve_category(db, payload.category)

    product = Product(**data, rating=0)
    db.add(product)
    db.commit()
    db.refresh(product)

    write_log(db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products",
              ip=client_ip(request), meta={"id": product.id, "name": product.name})
    return product


# =========================
# UPDATE
# =========================
@router.put("/{product_id}", response_model=product_schemas.ProductResponse)
def update_product(
    product_id: int,
    payload: product_schemas.ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "category" in changes:
        changes["category"], changes["category_id"] = resolve_category(db, changes["category"])

    for key, value in changes.items():
        setattr(product, key, value)

    db.commit()
    db.refresh(product)

    write_log(db, user_id=current_user.id, action="PRODUCT_UPDATE", resource="products",
              ip=client_ip(request), meta={"id": product.id, "fields": sorted(changes)})
    return product


# =========================
# DELETE
# =========================
@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    pid, pname = product.id, product.name
    db.delete(product)
    db.commit()
    write_log(db, user_id=current_user.id, action="PRODUCT_DELETE", resource="products",
              ip=client_ip(request), meta={"id": pid})
    return {"message": f"Product '{pname}' deleted successfully"}
