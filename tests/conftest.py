import datetime
import itertools
import urllib.parse

import pycouchdb

from topthought.schemas.blog import Post, PostsPage

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


class FakeCouchDB:
    """
    Minimal in-memory CouchDB stand-in.
    Set track_calls=True to record the order of calls.
    """

    def __init__(self, docs: dict | None = None, track_calls: bool = False):
        self.docs = {}
        self.track_calls = track_calls
        self.calls = []
        self._revs = itertools.count(1)
        for doc_id, doc in (docs or {}).items():
            self.docs[doc_id] = {"_rev": self._next_rev(), **doc, "_id": doc_id}

    def _next_rev(self) -> str:
        return f"{next(self._revs)}-fake"

    def _track(self, call: str):
        if self.track_calls:
            self.calls.append(call)

    def get(self, doc_id: str) -> dict:
        self._track(f"get({doc_id})")
        # the server decodes the path segment back into the id
        doc_id = urllib.parse.unquote(doc_id)
        if doc_id not in self.docs:
            raise pycouchdb.exceptions.NotFound(doc_id)
        return dict(self.docs[doc_id])

    def all(self, include_docs: bool = True):
        self._track(f"all(include_docs={include_docs})")
        # _all_docs is ordered by id
        rows = [self.docs[key] for key in sorted(self.docs)]
        if include_docs:
            return [{"id": doc["_id"], "doc": dict(doc)} for doc in rows]
        return [dict(doc) for doc in rows]

    def save(self, doc: dict) -> dict:
        self._track(f"save({doc.get('_id')})")
        doc_id = doc["_id"]
        existing = self.docs.get(doc_id)
        if existing and existing["_rev"] != doc.get("_rev"):
            raise pycouchdb.exceptions.Conflict(doc_id)
        if not existing and doc.get("_rev"):
            raise pycouchdb.exceptions.Conflict(doc_id)
        saved = {**doc, "_rev": self._next_rev()}
        self.docs[doc_id] = saved
        return dict(saved)

    def delete(self, doc_or_id):
        doc_id = doc_or_id["_id"] if isinstance(doc_or_id, dict) else doc_or_id
        self._track(f"delete({doc_id})")
        doc_id = urllib.parse.unquote(doc_id)
        if doc_id not in self.docs:
            raise pycouchdb.exceptions.NotFound(doc_id)
        rev = doc_or_id.get("_rev") if isinstance(doc_or_id, dict) else None
        if rev and rev != self.docs[doc_id]["_rev"]:
            raise pycouchdb.exceptions.Conflict(doc_id)
        del self.docs[doc_id]


class BrokenCouchDB:
    """CouchDB stand-in whose every call fails like a lost connection."""

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            raise ConnectionError("couchdb unreachable")

        return fail


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime.datetime | None = None):
        self.now = start or datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)

    def __call__(self) -> datetime.datetime:
        current = self.now
        self.now = self.now + datetime.timedelta(seconds=1)
        return current


def make_post(**overrides) -> Post:
    fields = {
        "id": "p1",
        "title": "Hello",
        "content": "World",
        "imageUrl": None,
        "youtubeUrl": None,
        "author": "Admin",
        "createdAt": datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc),
        "updatedAt": datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc),
    }
    fields.update(overrides)
    return Post(**fields)


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self,
        list_posts_return=None,
        get_post_return=None,
        create_post_return=None,
        update_post_return=None,
        delete_post_return=False,
    ):
        self._list_posts_return = list_posts_return or PostsPage(
            posts=[], totalPages=0, currentPage=1, total=0
        )
        self._get_post_return = get_post_return
        self._create_post_return = create_post_return
        self._update_post_return = update_post_return
        self._delete_post_return = delete_post_return
        self.calls = []

    def list_posts(self, page=1, limit=10, search=None):
        self.calls.append(("list_posts", page, limit, search))
        return self._list_posts_return

    def get_post(self, post_id: str):
        self.calls.append(("get_post", post_id))
        return self._get_post_return

    def create_post(self, data, author=None):
        self.calls.append(("create_post", data, author))
        return self._create_post_return

    def update_post(self, post_id, data):
        self.calls.append(("update_post", post_id, data))
        return self._update_post_return

    def delete_post(self, post_id):
        self.calls.append(("delete_post", post_id))
        return self._delete_post_return


class FakeAdminRepo:
    def __init__(self, admins: dict | None = None):
        self.admins = admins or {}
        self.created = []

    def get_admin(self, username):
        return self.admins.get(username)

    def create_admin(self, username, password_hash):
        doc = {
            "_id": f"admin_user:{username}",
            "type": "admin_user",
            "username": username,
            "password": password_hash,
        }
        self.admins[username] = doc
        self.created.append(doc)
        return doc
