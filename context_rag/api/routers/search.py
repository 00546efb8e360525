"""Search API endpoints.

Routes:
- POST /contexts/{context_id}/search - Answer a question from a context's documents
- POST /contexts/{context_id}/suggestions - Suggest follow-up questions

Dependencies: context_rag.core.rag_query
System role: Question answering HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from context_rag.api.deps import get_orchestrator
from context_rag.core.exceptions import ContextNotFoundError, ValidationError
from context_rag.core.rag_query import RAGOrchestrator
from context_rag.models.search import (
    SearchRequest,
    SearchResponse,
    SuggestionRequest,
    SuggestionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contexts", tags=["search"])


@router.post("/{context_id}/search", response_model=SearchResponse)
async def search(
    context_id: int,
    request: SearchRequest,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
) -> SearchResponse:
    """Answer a question from the documents of a context.

    "Nothing found" outcomes and generation failures are normal responses
    distinguished by ``status``; only invalid input maps to an HTTP error.

    Args:
        context_id: Context to search
        request: SearchRequest with the user query
        orchestrator: Injected RAGOrchestrator

    Returns:
        SearchResponse: Answer with cited sources

    Raises:
        HTTPException(400): Blank query
        HTTPException(404): Context not registered
    """
    try:
        return await orchestrator.search(request.query, context_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ContextNotFoundError:
        raise HTTPException(status_code=404, detail="Invalid context")


@router.post("/{context_id}/suggestions", response_model=SuggestionResponse)
async def suggestions(
    context_id: int,
    request: SuggestionRequest,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
) -> SuggestionResponse:
    """Suggest follow-up questions for a previous answer.

    Raises:
        HTTPException(404): Context not registered
    """
    if orchestrator.repository.get(context_id) is None:
        raise HTTPException(status_code=404, detail="Invalid context")

    questions = await orchestrator.suggest_follow_ups(request.query, request.answer)
    return SuggestionResponse(suggestions=questions)
