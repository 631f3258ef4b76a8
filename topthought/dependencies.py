import logging

from fastapi import Depends, HTTPException

from topthought.db.couchdb import get_couch
from topthought.repos.admin_repo import CouchAdminRepo
from topthought.repos.posts_repo import CouchPostsRepo
from topthought.security import get_settings
from topthought.services.auth_service import AuthService
from topthought.services.posts_service import PostsService
from topthought.services.suggestion_service import SuggestionService

logger = logging.getLogger(__name__)


def get_posts_repo(couch_db=Depends(get_couch)):
    return CouchPostsRepo(couch_db)


def get_admin_repo(couch_db=Depends(get_couch)):
    return CouchAdminRepo(couch_db)


def get_posts_service(
    repo=Depends(get_posts_repo),
    current_settings=Depends(get_settings),
):
    return PostsService(repo=repo, default_author=current_settings.DEFAULT_AUTHOR)


def get_auth_service(
    repo=Depends(get_admin_repo),
    current_settings=Depends(get_settings),
):
    return AuthService(repo=repo, settings=current_settings)


def get_suggestion_service(current_settings=Depends(get_settings)):
    try:
        return SuggestionService(
            api_key=current_settings.OPENAI_API_KEY, model=current_settings.OPENAI_MODEL
        )
    except ValueError as e:
        logger.error(f"Suggestion provider unavailable: {e}")
        raise HTTPException(status_code=502, detail="Failed to generate suggestions")
