import logging
from typing import List, Optional

from topthought.client.api import ApiError, BlogApiClient, NotFoundError
from topthought.schemas.blog import Post

logger = logging.getLogger(__name__)


def has_video(post: Post) -> bool:
    return bool(post.youtubeUrl)


class PostsFeed:
    """
    One page of the post listing as a reader sees it.

    Pagination fields are copied from the server response as-is; the page
    size is whatever the caller asked for, never assumed.
    """

    def __init__(
        self,
        client: BlogApiClient,
        page: int = 1,
        limit: int = 10,
        search: str = "",
    ):
        self.client = client
        self.page = page
        self.limit = limit
        self.search = search

        self.posts: List[Post] = []
        self.loading = False
        self.loaded = False
        self.error: Optional[str] = None
        self.total_pages = 0
        self.current_page = 1
        self.total = 0

    @property
    def is_empty(self) -> bool:
        """True for a successful fetch that matched nothing."""
        return self.loaded and self.error is None and self.total == 0 and not self.posts

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def video_posts(self) -> List[Post]:
        return [post for post in self.posts if has_video(post)]

    async def refetch(self) -> None:
        self.loading = True
        self.error = None
        try:
            result = await self.client.get_posts(
                page=self.page, limit=self.limit, search=self.search or None
            )
        except ApiError as e:
            self.error = e.message or "Failed to fetch posts"
            logger.warning(f"Failed to fetch posts: {self.error}")
        else:
            self.posts = result.posts
            self.total_pages = result.totalPages
            self.current_page = result.currentPage
            self.total = result.total
            self.loaded = True
        finally:
            self.loading = False

    async def go_to(self, page: int) -> None:
        self.page = page
        await self.refetch()

    async def set_search(self, search: str) -> None:
        self.search = search
        self.page = 1
        await self.refetch()


class PostFeed:
    """A single post by id, distinguishing not-found from a failed request."""

    def __init__(self, client: BlogApiClient, post_id: str):
        self.client = client
        self.post_id = post_id

        self.post: Optional[Post] = None
        self.loading = False
        self.error: Optional[str] = None
        self.not_found = False

    async def refetch(self) -> None:
        if not self.post_id:
            return
        self.loading = True
        self.error = None
        self.not_found = False
        try:
            self.post = await self.client.get_post(self.post_id)
        except NotFoundError:
            self.post = None
            self.not_found = True
        except ApiError as e:
            self.error = e.message or "Failed to fetch post"
            logger.warning(f"Failed to fetch post {self.post_id}: {self.error}")
        finally:
            self.loading = False
