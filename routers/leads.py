import time
import json
import asyncio
import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import Response, StreamingResponse
from models.internal import Lead, SavedProfile
from models.requests import SearchRequest
from models.responses import SearchResponse, SearchState, ErrorResponse
from services.errors import EmptySelection, SessionChanged
from services.orchestrator import ProgressCallback, SearchOrchestrator, error_type_of
from services.report_exporter import export_csv
from services.session import SessionManager
from config import settings
from utils.auth import get_session_manager, get_orchestrator, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["leads"])


def _start_search(
    request: SearchRequest,
    session: SessionManager,
    orchestrator: SearchOrchestrator,
    on_progress: Optional[ProgressCallback] = None,
) -> asyncio.Task:
    """Validate the request, mark the search as running and start it.

    The state flips to searching before this returns, so a second request
    arriving while the first is in flight gets a 409.
    """
    if orchestrator.state == SearchState.SEARCHING:
        raise HTTPException(status_code=409, detail="A lead search is already running")
    try:
        selected = session.select_profiles(request.profile_ids)
    except EmptySelection as e:
        raise HTTPException(status_code=400, detail=str(e))
    session.leads = []
    run_id = orchestrator.begin()
    return asyncio.create_task(
        _run_for_session(selected, session, orchestrator, run_id, session.generation, on_progress)
    )


async def _run_for_session(
    selected: List[SavedProfile],
    session: SessionManager,
    orchestrator: SearchOrchestrator,
    run_id: int,
    generation: int,
    on_progress: Optional[ProgressCallback],
) -> List[Lead]:
    leads = await orchestrator.run(selected, on_progress=on_progress, run_id=run_id)
    if session.generation != generation:
        logger.warning(f"Session changed during lead search; {len(leads)} leads discarded")
        raise SessionChanged()
    session.leads = leads
    return leads


def _search_response(orchestrator: SearchOrchestrator, session: SessionManager) -> SearchResponse:
    return SearchResponse(
        state=orchestrator.state,
        leads=session.leads,
        failures=orchestrator.failures,
        error=str(orchestrator.error) if orchestrator.error else None,
        elapsed=orchestrator.elapsed,
    )


@router.post(
    "/leads/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No profile selected"},
        409: {"model": ErrorResponse, "description": "Search already running, or the session changed mid-search"},
        502: {"model": ErrorResponse, "description": "Lead search failed"},
    },
    summary="Find leads for the selected profiles",
)
async def search_leads(
    request: SearchRequest,
    user: str = Depends(get_current_user),
    session: SessionManager = Depends(get_session_manager),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
) -> SearchResponse:
    task = _start_search(request, session, orchestrator)
    try:
        await task
    except SessionChanged as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Lead search failed for {user} after {orchestrator.elapsed}s: {e}", exc_info=True)
        raise HTTPException(
            status_code=502,
            detail={
                "error": "Lead search failed",
                "detail": str(e),
                "error_type": error_type_of(e),
            },
        )
    return _search_response(orchestrator, session)


@router.post("/leads/search-stream", summary="Find leads with SSE progress")
async def search_leads_stream(
    request: SearchRequest,
    user: str = Depends(get_current_user),
    session: SessionManager = Depends(get_session_manager),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    progress_q: asyncio.Queue = asyncio.Queue()

    async def on_progress(event_type: str, data: dict):
        await progress_q.put({"type": event_type, **data})

    start_time = time.time()
    task = _start_search(request, session, orchestrator, on_progress=on_progress)

    async def generate():
        while not task.done():
            try:
                event = await asyncio.wait_for(progress_q.get(), timeout=0.5)
                yield f"data: {json.dumps(event)}\n\n"
            except asyncio.TimeoutError:
                pass

        # Drain remaining events
        while not progress_q.empty():
            event = progress_q.get_nowait()
            yield f"data: {json.dumps(event)}\n\n"

        elapsed = round(time.time() - start_time, 1)
        error = task.exception()
        if error is not None:
            logger.error(f"Lead search stream failed after {elapsed}s: {error}")
            yield f"data: {json.dumps({'type': 'error', 'error_type': error_type_of(error), 'message': str(error)})}\n\n"
            return

        result = _search_response(orchestrator, session)
        yield f"data: {json.dumps({'type': 'result', 'elapsed': elapsed, 'data': result.model_dump(mode='json', by_alias=True)})}\n\n"

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.get("/leads", response_model=SearchResponse)
async def get_leads(
    user: str = Depends(get_current_user),
    session: SessionManager = Depends(get_session_manager),
    orchestrator: SearchOrchestrator = Depends(get_orchestrator),
):
    """Latest search state and its leads."""
    return _search_response(orchestrator, session)


@router.get("/leads/export", summary="Download the latest leads as CSV")
async def export_leads(
    user: str = Depends(get_current_user),
    session: SessionManager = Depends(get_session_manager),
):
    if not session.leads:
        raise HTTPException(status_code=404, detail="No leads to export")
    return Response(
        content=export_csv(session.leads).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{settings.export_filename}"'},
    )


@router.get("/health")
async def health():
    return {"status": "ok"}
