import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from topthought import dependencies as deps
from topthought.errors import INTERNAL_ERROR_MESSAGE
from topthought.schemas.auth import AdminIdentity
from topthought.schemas.blog import MessageResponse, Post, PostInput, PostsPage
from topthought.security import get_current_admin
from topthought.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])

POST_NOT_FOUND = "Post not found"


@router.get("", response_model=PostsPage)
def list_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    search: Optional[str] = Query(None),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a page of posts, newest first, optionally filtered by a search term."""
    try:
        return service.list_posts(page=page, limit=limit, search=search)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Get posts error: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.get("/{post_id}", response_model=Post)
def get_post(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single post by id."""
    try:
        post = service.get_post(post_id)
        if not post:
            raise HTTPException(status_code=404, detail=POST_NOT_FOUND)
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Get post error for {post_id}: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.post("", response_model=Post, status_code=201)
def create_post(
    data: PostInput,
    admin: AdminIdentity = Depends(get_current_admin),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return service.create_post(data, author=admin.username)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Create post error: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.put("/{post_id}", response_model=Post)
def update_post(
    post_id: str,
    data: PostInput,
    admin: AdminIdentity = Depends(get_current_admin),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        post = service.update_post(post_id, data)
        if not post:
            raise HTTPException(status_code=404, detail=POST_NOT_FOUND)
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Update post error for {post_id}: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    admin: AdminIdentity = Depends(get_current_admin),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        if not service.delete_post(post_id):
            raise HTTPException(status_code=404, detail=POST_NOT_FOUND)
        return {"message": "Post deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Delete post error for {post_id}: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR_MESSAGE)
