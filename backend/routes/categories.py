# backend/routes/categories.py
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from database import get_db
from models.category import Category
from models.product import Product
from models.users import User
from utils.sessions import require_admin
from utils.audit import write_log, client_ip
from utils.storage_policy import read_with_policy, FailClosed
import schemas.category as category_schemas

router = APIRouter(prefix="/categories", tags=["Categories"])


# Visible products per category name
def product_counts(db: Session) -> Dict[str, int]:
    rows = (
        db.query(Product.category, func.count(Product.id))
        .filter(Product.visible.is_(True))
        .group_by(Product.category)
        .all()
    )
    return {name: count for name, count in rows if name}


def _serialize(category: Category, counts: Dict[str, int]) -> category_schemas.CategoryResponse:
    out = category_schemas.CategoryResponse.model_validate(category)
    out.product_count = counts.get(category.name, 0)
    return out


def _get_or_404(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


def _name_taken(db: Session, name: str, exclude_id: int = None) -> bool:
    query = db.query(Category).filter(func.lower(Category.name) == name.strip().lower())
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


def _products_of(db: Session, category: Category):
    # Linked by id, or by name for products written before the category existed
    return db.query(Product).filter(
        Product.visible.is_(True),
        (Product.category_id == category.id) | (Product.category == category.name),
    )


@router.get("", response_model=category_schemas.CategoryListEnvelope)
def list_categories(db: Session = Depends(get_db)):
    def _read():
        return db.query(Category).order_by(Category.name.asc()).all(), product_counts(db)

    categories, counts = read_with_policy(db, FailClosed(), _read, what="categories")
    return {"success": True, "categories": [_serialize(c, counts) for c in categories]}


@router.post("", response_model=category_schemas.CategoryEnvelope, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: category_schemas.CategoryCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    name = payload.name.strip()
    if _name_taken(db, name):
        raise HTTPException(status_code=400, detail="Category already exists")

    category = Category(name=name, description=payload.description, image=payload.image, is_active=payload.is_active)
    db.add(category)
    db.commit()
    db.refresh(category)

    # Adopt free-text products that already carry this name
    db.query(Product).filter(func.lower(Product.category) == name.lower(), Product.category_id.is_(None)).update(
        {Product.category_id: category.id, Product.category: category.name}, synchronize_session=False
    )
    db.commit()

    write_log(db, user_id=current_user.id, action="CATEGORY_CREATE", resource="categories",
              ip=client_ip(request), meta={"id": category.id, "name": category.name})
    return {"success": True, "category": _serialize(category, product_counts(db))}


@router.put("/{category_id}", response_model=category_schemas.CategoryEnvelope)
def update_category(
    category_id: int,
    payload: category_schemas.CategoryUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    category = _get_or_404(db, category_id)
    changes = payload.model_dump(exclude_unset=True)

    old_name = category.name
    new_name = (changes.get("name") or old_name).strip()
    if new_name != old_name and _name_taken(db, new_name, exclude_id=category.id):
        raise HTTPException(status_code=400, detail="Category name already exists")

    for key, value in changes.items():
        # Only the image may be cleared with null
        if key == "name" or (value is None and key != "image"):
            continue
        setattr(category, key, value)
    category.name = new_name

    if new_name != old_name:
        # Renames follow through to every linked product
        db.query(Product).filter(
            (Product.category_id == category.id) | (Product.category == old_name)
        ).update({Product.category: new_name, Product.category_id: category.id}, synchronize_session=False)

    db.commit()
    db.refresh(category)

    write_log(db, user_id=current_user.id, action="CATEGORY_UPDATE", resource="categories",
              ip=client_ip(request), meta={"id": category.id, "old_name": old_name, "name": new_name})
    return {"success": True, "category": _serialize(category, product_counts(db))}


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    category = _get_or_404(db, category_id)

    in_use = _products_of(db, category).count()
    if in_use > 0:
        raise HTTPException(
            status_code=400,
            detail=f"Cannot delete category with {in_use} products. Please move products to another category first.",
        )

    # Hidden products keep their display name but lose the link
    db.query(Product).filter(Product.category_id == category.id).update(
        {Product.category_id: None}, synchronize_session=False
    )
    db.delete(category)
    db.commit()

    write_log(db, user_id=current_user.id, action="CATEGORY_DELETE", resource="categories",
              ip=client_ip(request), meta={"id": category_id})
    return {"success": True, "message": "Category deleted successfully"}


@router.get("/{category_id}/products", response_model=category_schemas.CategoryProductsPage)
def list_category_products(
    category_id: int,
    limit: int = Query(20, ge=1, le=500),
    skip: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    category = _get_or_404(db, category_id)
    query = _products_of(db, category)
    total = query.count()
    products = query.order_by(Product.created_at.desc(), Product.id.desc()).offset(skip).limit(limit).all()
    return {
        "success": True,
        "category": category,
        "products": products,
        "total": total,
        "limit": limit,
        "skip": skip,
    }
