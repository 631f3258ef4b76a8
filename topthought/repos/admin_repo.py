import datetime
from typing import Optional

import pycouchdb

from topthought.repos.posts_repo import doc_path

ADMIN_TYPE = "admin_user"


def admin_doc_id(username: str) -> str:
    return f"{ADMIN_TYPE}:{username}"


class CouchAdminRepo:
    """Persistence helper for admin accounts."""

    def __init__(self, couch_db):
        self.db = couch_db

    def get_admin(self, username: str) -> Optional[dict]:
        try:
            doc = self.db.get(doc_path(admin_doc_id(username)))
        except pycouchdb.exceptions.NotFound:
            return None
        return doc if doc.get("type") == ADMIN_TYPE else None

    def create_admin(self, username: str, password_hash: str) -> dict:
        doc = {
            "_id": admin_doc_id(username),
            "type": ADMIN_TYPE,
            "username": username,
            "password": password_hash,
            "createdAt": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        }
        return self.db.save(doc)
