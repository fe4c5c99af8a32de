# backend/routes/homepage.py
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from models.users import User
from models.product import Product
from routes.content import get_content_store
from utils.content_store import ContentStore
from utils.sessions import require_admin
from utils.audit import write_log, client_ip
from config import settings
from utils.storage_policy import read_with_policy, DegradeToSample, FailClosed
from utils.catalog_samples import sample_product_list
import schemas.product as product_schemas

router = APIRouter(prefix="/homepage", tags=["Homepage"])


def _product_ids(raw: List[Any]) -> List[int]:
    ids = []
    for value in raw or []:
        try:
            ids.append(int(value))
        except (TypeError, ValueError):
            continue
    return ids


@router.get("")
def get_homepage(store: ContentStore = Depends(get_content_store)) -> Dict[str, Any]:
    return store.get("homepage")


@router.put("")
def update_homepage(
    request: Request,
    document: Dict[str, Any] = Body(...),
    store: ContentStore = Depends(get_content_store),
    current_user: User = Depends(require_admin),
) -> Dict[str, Any]:
    saved = store.put("homepage", document)
    write_log(store.db, user_id=current_user.id, action="CONTENT_UPDATE", resource="content",
              ip=client_ip(request), meta={"type": "homepage"})
    return saved


# featuredProductIds is the curated list; Product.featured does not feed it
@router.get("/featured", response_model=product_schemas.ProductList)
def get_featured_products(store: ContentStore = Depends(get_content_store)):
    db: Session = store.db
    ids = _product_ids(store.get("homepage").get("featuredProductIds"))

    def _read():
        if not ids:
            return []
        found = {
            p.id: p
            for p in db.query(Product).filter(Product.id.in_(ids), Product.visible.is_(True)).all()
        }
        return [found[i] for i in ids if i in found]

    def _sample():
        by_id = {p["id"]: p for p in sample_product_list()["products"]}
        return [by_id[i] for i in ids if i in by_id]

    policy = DegradeToSample(_sample) if settings.CATALOG_SAMPLE_FALLBACK else FailClosed()
    products = read_with_policy(db, policy, _read, what="featured products")
    return {"products": products, "total": len(products)}
