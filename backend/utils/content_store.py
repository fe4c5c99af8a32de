# utils/content_store.py
"""Page content (about, homepage, theme, ...) stored one document per type.

The ``content`` table is the primary store. Every document is mirrored to
``<CONTENT_DIR>/<type>.json`` so pages keep rendering while the database is
down. Reads prefer whichever copy carries the later ``updatedAt``; a type
that exists nowhere is materialized from ``content_defaults``.

There is no locking: concurrent ``put`` calls for one type are
last-write-wins.
"""
import enum
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config import settings
from models.content import Content
from utils.content_defaults import DEFAULTS

logger = logging.getLogger(__name__)


class ContentType(str, enum.Enum):
    about = "about"
    contact = "contact"
    categories = "categories"
    footer = "footer"
    header = "header"
    settings = "settings"
    theme = "theme"
    homepage = "homepage"
    email = "email"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


class ContentStore:
    def __init__(self, db: Session, directory: Optional[str] = None):
        self.db = db
        self.directory = Path(directory or settings.CONTENT_DIR)

    # ---- file mirror ----

    def _path(self, content_type: str) -> Path:
        return self.directory / f"{content_type}.json"

    def _read_file(self, content_type: str) -> Optional[dict]:
        path = self._path(content_type)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Unreadable content file %s, ignoring it: %s", path, e)
            return None

    def _write_file(self, content_type: str, document: dict) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file first so readers never see half a document
        fd, tmp = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self._path(content_type))
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

    # ---- database ----

    def _read_db(self, content_type: str) -> tuple:
        """Return (reachable, document)."""
        try:
            row = self.db.query(Content).filter(Content.type == content_type).first()
            return True, (row.data if row else None)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning("Content database unavailable, using files for %s: %s", content_type, e)
            return False, None

    def _write_db(self, content_type: str, document: dict) -> bool:
        try:
            row = self.db.query(Content).filter(Content.type == content_type).first()
            if row is None:
                row = Content(type=content_type, data=document)
                self.db.add(row)
            else:
                row.data = document
            self.db.commit()
            return True
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning("Could not store %s content in the database, file copy only: %s", content_type, e)
            return False

    # ---- public API ----

    def get(self, content_type: str) -> dict:
        content_type = ContentType(content_type).value
        reachable, from_db = self._read_db(content_type)
        from_file = self._read_file(content_type)

        if from_db is not None and from_file is not None:
            if str(from_file.get("updatedAt", "")) > str(from_db.get("updatedAt", "")):
                # A put landed while the database was down
                self._write_db(content_type, from_file)
                return from_file
            return from_db

        if from_db is not None:
            return from_db

        if from_file is not None:
            if reachable:
                self._write_db(content_type, from_file)
            return from_file

        document = DEFAULTS[content_type]()
        document["id"] = content_type
        document["updatedAt"] = _now_iso()
        self._write_file(content_type, document)
        if reachable:
            self._write_db(content_type, document)
        return document

    def put(self, content_type: str, document: dict) -> dict:
        """Replace the whole document for a type and stamp updatedAt."""
        content_type = ContentType(content_type).value
        stored = dict(document)
        stored["id"] = content_type
        stored["updatedAt"] = _now_iso()
        self._write_file(content_type, stored)
        self._write_db(content_type, stored)
        return stored
