# backend/routes/content.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from utils.sessions import require_admin
from utils.audit import write_log, client_ip
from utils.content_store import ContentStore

router = APIRouter(prefix="/content", tags=["Content"])

# CMS pages served under /content/<page>. Reads are public, writes need admin.
PAGES = ("about", "contact", "categories", "footer", "header", "settings", "theme")


def get_content_store(db: Session = Depends(get_db)) -> ContentStore:
    return ContentStore(db)


def _reader(page: str):
    def read_page(store: ContentStore = Depends(get_content_store)) -> Dict[str, Any]:
        return store.get(page)
    read_page.__name__ = f"get_{page}_content"
    return read_page


def _writer(page: str):
    def write_page(
        request: Request,
        document: Dict[str, Any] = Body(...),
        store: ContentStore = Depends(get_content_store),
        current_user: User = Depends(require_admin),
    ) -> Dict[str, Any]:
        saved = store.put(page, document)
        write_log(store.db, user_id=current_user.id, action="CONTENT_UPDATE", resource="content",
                  ip=client_ip(request), meta={"type": page})
        return saved
    write_page.__name__ = f"update_{page}_content"
    return write_page


for _page in PAGES:
    router.add_api_route(f"/{_page}", _reader(_page), methods=["GET"])
    router.add_api_route(f"/{_page}", _writer(_page), methods=["PUT"])
