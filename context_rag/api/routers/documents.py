"""Document indexing API endpoints.

Routes:
- POST /contexts/{context_id}/documents - Index a document's extracted text
- DELETE /contexts/{context_id}/documents - Clear a context's index
- GET /contexts/{context_id}/documents/count - Distinct indexed documents

Dependencies: context_rag.core.rag_query
System role: Document ingestion HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from context_rag.api.deps import get_orchestrator
from context_rag.core.exceptions import ContextNotFoundError, ValidationError
from context_rag.core.rag_query import RAGOrchestrator
from context_rag.models.search import DocumentCountResponse, IngestRequest, IngestResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contexts", tags=["documents"])


def _require_context(orchestrator: RAGOrchestrator, context_id: int) -> None:
    if orchestrator.repository.get(context_id) is None:
        raise HTTPException(status_code=404, detail="Invalid context")


@router.post(
    "/{context_id}/documents",
    response_model=IngestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def ingest_document(
    context_id: int,
    request: IngestRequest,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
) -> IngestResponse:
    """Chunk, embed and index a document under a context.

    Re-posting a filename replaces its earlier chunks.

    Args:
        context_id: Target context
        request: IngestRequest with filename and extracted text
        orchestrator: Injected RAGOrchestrator

    Returns:
        IngestResponse: Chunks indexed and the context's document count

    Raises:
        HTTPException(400): Blank filename
        HTTPException(404): Context not registered
    """
    try:
        chunk_count = await orchestrator.ingest(context_id, request.filename, request.content)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ContextNotFoundError:
        raise HTTPException(status_code=404, detail="Invalid context")

    return IngestResponse(
        context_id=context_id,
        filename=request.filename,
        chunk_count=chunk_count,
        document_count=orchestrator.document_count(context_id),
    )


@router.delete("/{context_id}/documents", status_code=status.HTTP_204_NO_CONTENT)
async def clear_documents(
    context_id: int,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
) -> Response:
    """Remove every indexed document of a context."""
    _require_context(orchestrator, context_id)
    orchestrator.clear_context(context_id)
    logger.info(f"{__name__}:clear_documents - Cleared context {context_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{context_id}/documents/count", response_model=DocumentCountResponse)
async def document_count(
    context_id: int,
    orchestrator: RAGOrchestrator = Depends(get_orchestrator),
) -> DocumentCountResponse:
    """Number of distinct documents indexed for a context."""
    _require_context(orchestrator, context_id)
    return DocumentCountResponse(
        context_id=context_id,
        document_count=orchestrator.document_count(context_id),
    )
