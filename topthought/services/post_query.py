import datetime
import math
from typing import Optional

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


class PostQuery:
    """
    Plan for one page of the post listing: a search filter over title and
    content, newest-first ordering, and a skip/limit window.
    """

    def __init__(self, page: int = 1, limit: int = 10, search: Optional[str] = None):
        self.page = page
        self.limit = limit
        self.search = search or None
        self._needle = self.search.casefold() if self.search else None

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def matches(self, doc: dict) -> bool:
        if self._needle is None:
            return True
        title = str(doc.get("title") or "")
        content = str(doc.get("content") or "")
        return self._needle in title.casefold() or self._needle in content.casefold()

    @staticmethod
    def sort_key(doc: dict) -> datetime.datetime:
        return parse_timestamp(doc.get("createdAt"))

    def window(self, ordered: list) -> list:
        return ordered[self.skip : self.skip + self.limit]

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)


def parse_timestamp(value) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.datetime.fromisoformat(value)
        except ValueError:
            return _EPOCH
    else:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed
