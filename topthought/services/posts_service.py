import datetime
import logging
from typing import Callable, Optional

from topthought.schemas.blog import Post, PostInput, PostsPage
from topthought.services.post_query import PostQuery, parse_timestamp

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "content", "imageUrl", "youtubeUrl")


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class PostsService:
    def __init__(
        self,
        repo,
        default_author: str = "Admin",
        clock: Callable[[], datetime.datetime] = utcnow,
    ):
        self.repo = repo
        self.default_author = default_author
        self.clock = clock

    def list_posts(
        self, page: int = 1, limit: int = 10, search: Optional[str] = None
    ) -> PostsPage:
        query = PostQuery(page=page, limit=limit, search=search)
        docs, total = self.repo.find(query)
        logger.debug(
            f"Listed {len(docs)} of {total} posts "
            f"(page={page}, limit={limit}, search={search!r})"
        )
        return PostsPage(
            posts=[self._to_post(doc) for doc in docs],
            totalPages=query.total_pages(total),
            currentPage=page,
            total=total,
        )

    def get_post(self, post_id: str) -> Optional[Post]:
        doc = self.repo.get_post_doc(post_id)
        return self._to_post(doc) if doc else None

    def create_post(self, data: PostInput, author: Optional[str] = None) -> Post:
        now = self.clock().isoformat()
        fields = {
            "title": data.title,
            "content": data.content,
            "imageUrl": data.imageUrl,
            "youtubeUrl": data.youtubeUrl,
            "author": author or self.default_author,
            "createdAt": now,
            "updatedAt": now,
        }
        doc = self.repo.create_post_doc(fields)
        logger.info(f"Created post {doc['_id']}")
        return self._to_post(doc)

    def update_post(self, post_id: str, data: PostInput) -> Optional[Post]:
        # Optional URLs left out of the body keep their stored value
        sent = data.model_fields_set | {"title", "content"}
        changes = {
            field: getattr(data, field) for field in EDITABLE_FIELDS if field in sent
        }

        def mutate(doc: dict) -> dict:
            doc.update(changes)
            doc["updatedAt"] = self._next_update_time(doc).isoformat()
            return doc

        doc = self.repo.update_post_doc(post_id, mutate)
        if doc is None:
            return None
        logger.info(f"Updated post {post_id}")
        return self._to_post(doc)

    def delete_post(self, post_id: str) -> bool:
        deleted = self.repo.delete_post_doc(post_id)
        if deleted:
            logger.info(f"Deleted post {post_id}")
        return deleted

    def _next_update_time(self, doc: dict) -> datetime.datetime:
        now = self.clock()
        previous = parse_timestamp(doc.get("updatedAt"))
        if now <= previous:
            now = previous + datetime.timedelta(microseconds=1)
        return now

    def _to_post(self, doc: dict) -> Post:
        return Post(
            id=doc["_id"],
            title=doc.get("title", ""),
            content=doc.get("content", ""),
            imageUrl=doc.get("imageUrl") or None,
            youtubeUrl=doc.get("youtubeUrl") or None,
            author=doc.get("author") or self.default_author,
            createdAt=parse_timestamp(doc.get("createdAt")),
            updatedAt=parse_timestamp(doc.get("updatedAt")),
        )
