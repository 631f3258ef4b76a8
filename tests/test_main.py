import asyncio
import datetime

import pytest
from fastapi.testclient import TestClient

import topthought.main as main_module
from topthought import dependencies as deps
from topthought.main import app
from topthought.repos.admin_repo import CouchAdminRepo
from topthought.repos.posts_repo import CouchPostsRepo
from topthought.security import get_settings
from topthought.services.auth_service import AuthService
from topthought.services.posts_service import PostsService
from topthought.settings import Settings
from tests.conftest import TEST_JWT_SECRET, FakeCouchDB, StepClock


def test_root_endpoint_runs_lifespan(monkeypatch):
    prepared = []
    monkeypatch.setattr(main_module, "settings", Settings(JWT_SECRET=TEST_JWT_SECRET))
    monkeypatch.setattr(main_module, "prepare_store", lambda: prepared.append(True))

    with TestClient(app) as client:
        res = client.get("/")
        assert res.status_code == 200
        assert res.json() == {"message": "Top Thought Blog API is running"}

    assert prepared == [True]


def test_lifespan_refuses_to_start_without_jwt_secret(monkeypatch):
    prepared = []
    monkeypatch.setattr(main_module, "prepare_store", lambda: prepared.append(True))
    monkeypatch.setattr(
        main_module, "settings", Settings(JWT_SECRET="", ADMIN_PASSWORD="pw")
    )

    async def start():
        async with main_module.lifespan(app):
            pass

    with pytest.raises(RuntimeError, match="JWT_SECRET"):
        asyncio.run(start())
    assert prepared == []


def test_prepare_store_seeds_admin(monkeypatch):
    couch = FakeCouchDB({})
    monkeypatch.setattr(main_module, "ensure_database", lambda: couch)
    monkeypatch.setattr(
        main_module,
        "settings",
        Settings(JWT_SECRET=TEST_JWT_SECRET, ADMIN_USERNAME="admin", ADMIN_PASSWORD="pw"),
    )

    main_module.prepare_store()

    assert couch.docs["admin_user:admin"]["username"] == "admin"


def test_full_post_lifecycle_through_the_app(monkeypatch):
    monkeypatch.setattr(main_module, "prepare_store", lambda: None)
    couch = FakeCouchDB({})
    settings = Settings(JWT_SECRET=TEST_JWT_SECRET, ADMIN_PASSWORD="admin123")
    monkeypatch.setattr(main_module, "settings", settings)
    AuthService(CouchAdminRepo(couch), settings).ensure_admin()

    original_overrides = dict(app.dependency_overrides)
    app.dependency_overrides[get_settings] = lambda: settings
    clock = StepClock()
    app.dependency_overrides[deps.get_posts_service] = lambda: PostsService(
        CouchPostsRepo(couch), clock=clock
    )
    app.dependency_overrides[deps.get_auth_service] = lambda: AuthService(
        CouchAdminRepo(couch), settings
    )
    try:
        with TestClient(app) as client:
            res = client.post("/auth/login", json={"username": "admin", "password": "admin123"})
            assert res.status_code == 200
            headers = {"Authorization": f"Bearer {res.json()['token']}"}

            for title in ("Alpha Notes", "Beta Guide", "Alpha Beta Fusion"):
                res = client.post(
                    "/posts", json={"title": title, "content": "entry"}, headers=headers
                )
                assert res.status_code == 201
                assert res.json()["author"] == "admin"

            res = client.get("/posts", params={"search": "alpha"})
            assert res.status_code == 200
            assert [p["title"] for p in res.json()["posts"]] == [
                "Alpha Beta Fusion",
                "Alpha Notes",
            ]
            first_id = res.json()["posts"][1]["id"]

            res = client.put(
                f"/posts/{first_id}",
                json={"title": "Gamma Notes", "content": "entry"},
                headers=headers,
            )
            assert res.status_code == 200
            updated = res.json()
            assert datetime.datetime.fromisoformat(
                updated["updatedAt"]
            ) > datetime.datetime.fromisoformat(updated["createdAt"])

            res = client.delete(f"/posts/{first_id}", headers=headers)
            assert res.status_code == 200
            assert client.get(f"/posts/{first_id}").status_code == 404

            res = client.get("/posts", params={"limit": 1, "page": 5})
            assert res.json() == {"posts": [], "totalPages": 2, "currentPage": 5, "total": 2}
    finally:
        app.dependency_overrides = original_overrides
