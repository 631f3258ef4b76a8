import logging

from fastapi import APIRouter, Depends, HTTPException

from topthought import dependencies as deps
from topthought.schemas.ai import SuggestionRequest, SuggestionResponse
from topthought.security import get_current_admin
from topthought.services.suggestion_service import SuggestionService

router = APIRouter(prefix="/ai", tags=["ai"], dependencies=[Depends(get_current_admin)])
logger = logging.getLogger(__name__)


@router.post("/suggestions", response_model=SuggestionResponse)
async def suggest(
    request: SuggestionRequest,
    service: SuggestionService = Depends(deps.get_suggestion_service),
):
    """
    Suggest titles, descriptions or tags for draft post text.
    Suggestions are returned to the editor only and never stored.
    """
    try:
        suggestions = await service.suggest(
            kind=request.kind, text=request.text, count=request.count
        )
    except Exception as e:
        logger.error(f"Error generating {request.kind} suggestions: {e}")
        raise HTTPException(status_code=502, detail="Failed to generate suggestions")

    return SuggestionResponse(kind=request.kind, suggestions=suggestions)
