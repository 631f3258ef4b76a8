import logging
import urllib.parse
import uuid
from typing import Callable, List, Optional, Tuple

import pycouchdb

from topthought.services.post_query import PostQuery

logger = logging.getLogger(__name__)

POST_TYPE = "post"
CONFLICT_ATTEMPTS = 5


def doc_path(doc_id: str) -> str:
    """Escape a document id for use as a single URL path segment."""
    return urllib.parse.quote(doc_id, safe="")


class CouchPostsRepo:
    def __init__(self, couch_db):
        self.db = couch_db

    def list_post_docs(self) -> List[dict]:
        all_docs = [row.get("doc", row) for row in self.db.all(include_docs=True)]
        return [doc for doc in all_docs if self._is_post(doc)]

    def find(self, query: PostQuery) -> Tuple[List[dict], int]:
        """Run a listing plan, returning the page of docs and the full match count."""
        matching = [doc for doc in self.list_post_docs() if query.matches(doc)]
        # sort() is stable, so equal timestamps keep _all_docs (id) order
        matching.sort(key=query.sort_key, reverse=True)
        return query.window(matching), len(matching)

    def get_post_doc(self, post_id: str) -> Optional[dict]:
        try:
            doc = self.db.get(doc_path(post_id))
        except pycouchdb.exceptions.NotFound:
            return None
        return doc if self._is_post(doc) else None

    def create_post_doc(self, fields: dict) -> dict:
        doc = {**fields, "_id": uuid.uuid4().hex, "type": POST_TYPE}
        return self.db.save(doc)

    def update_post_doc(
        self, post_id: str, mutate: Callable[[dict], dict]
    ) -> Optional[dict]:
        """
        Apply ``mutate`` to the latest revision of a post and save it.
        A revision conflict means another writer got there first; the change
        is re-applied on top of that write so the last writer wins.
        """
        for attempt in range(CONFLICT_ATTEMPTS):
            doc = self.get_post_doc(post_id)
            if doc is None:
                return None
            try:
                return self.db.save(mutate(dict(doc)))
            except pycouchdb.exceptions.Conflict:
                logger.warning(
                    f"Revision conflict updating post {post_id} (attempt {attempt + 1})"
                )
        raise pycouchdb.exceptions.Conflict(f"Could not update post {post_id}")

    def delete_post_doc(self, post_id: str) -> bool:
        for attempt in range(CONFLICT_ATTEMPTS):
            doc = self.get_post_doc(post_id)
            if doc is None:
                return False
            try:
                self.db.delete({"_id": doc_path(post_id), "_rev": doc["_rev"]})
                return True
            except pycouchdb.exceptions.NotFound:
                return False
            except pycouchdb.exceptions.Conflict:
                logger.warning(
                    f"Revision conflict deleting post {post_id} (attempt {attempt + 1})"
                )
        raise pycouchdb.exceptions.Conflict(f"Could not delete post {post_id}")

    @staticmethod
    def _is_post(doc: dict | None) -> bool:
        return bool(doc) and doc.get("type") == POST_TYPE
