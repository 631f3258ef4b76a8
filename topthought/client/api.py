import logging
from typing import List, Optional, Union

import httpx

from topthought.client.session import AuthSession
from topthought.schemas.blog import Post, PostInput, PostsPage

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, errors=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []


class NotFoundError(ApiError):
    pass


def error_from_response(response: httpx.Response) -> ApiError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    errors = body.get("errors") or []
    message = body.get("message") or (
        errors[0].get("msg") if errors else f"Request failed ({response.status_code})"
    )
    error_cls = NotFoundError if response.status_code == 404 else ApiError
    return error_cls(message, status_code=response.status_code, errors=errors)


class BlogApiClient:
    """Async client for the blog API."""

    def __init__(
        self,
        base_url: str,
        session: Optional[AuthSession] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.session = session or AuthSession()
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        headers = {**self.session.auth_headers(), **kwargs.pop("headers", {})}
        try:
            response = await self._client.request(
                method, url, headers=headers, **kwargs
            )
        except httpx.RequestError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(f"Could not reach the server: {e}") from e

        if response.status_code == 401 and self.session.is_authenticated:
            logger.info("Credential rejected by the server; clearing session")
            self.session.logout()
        if response.is_error:
            raise error_from_response(response)
        return response

    async def login(self, username: str, password: str) -> dict:
        response = await self._request(
            "POST", "/auth/login", json={"username": username, "password": password}
        )
        data = response.json()
        self.session.login(data["token"], data["user"])
        return data["user"]

    def logout(self) -> None:
        self.session.logout()

    async def get_posts(
        self, page: int = 1, limit: int = 10, search: Optional[str] = None
    ) -> PostsPage:
        params = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        response = await self._request("GET", "/posts", params=params)
        return PostsPage.model_validate(response.json())

    async def get_post(self, post_id: str) -> Post:
        response = await self._request("GET", f"/posts/{post_id}")
        return Post.model_validate(response.json())

    async def create_post(self, data: Union[PostInput, dict]) -> Post:
        response = await self._request("POST", "/posts", json=_post_body(data))
        return Post.model_validate(response.json())

    async def update_post(self, post_id: str, data: Union[PostInput, dict]) -> Post:
        response = await self._request(
            "PUT", f"/posts/{post_id}", json=_post_body(data)
        )
        return Post.model_validate(response.json())

    async def delete_post(self, post_id: str) -> str:
        response = await self._request("DELETE", f"/posts/{post_id}")
        return response.json()["message"]

    async def health(self) -> dict:
        response = await self._request("GET", "/health")
        return response.json()

    async def suggest(self, kind: str, text: str, count: int = 3) -> List[str]:
        response = await self._request(
            "POST", "/ai/suggestions", json={"kind": kind, "text": text, "count": count}
        )
        return response.json()["suggestions"]


def _post_body(data: Union[PostInput, dict]) -> dict:
    if isinstance(data, PostInput):
        return data.model_dump(exclude_unset=True)
    return {key: value for key, value in data.items() if value is not None}
