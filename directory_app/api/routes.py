"""
API Routes for the Directory / FAQ search.

Endpoints:
- GET  /api/directory          → fuzzy search + floor filter over the directory
- POST /api/directory/reset    → full directory, unfiltered
- GET  /api/directory/floors   → floor dropdown options
- POST /api/directory/reload   → refetch the directory sheet
- GET  /api/faq                → weighted fuzzy search over the FAQ (lazy-loaded)
- POST /api/faq/reset          → all FAQ entries
- POST /api/faq/reload         → refetch the FAQ sheet
- GET  /api/status             → load status of both datasets
"""

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from directory_app.services.datasets import DatasetUnavailableError, DirectorySession, LoadStatus
from directory_app.services.query_engine import SearchResult
from directory_app.services.render import render_directory_table, render_faq_cards, summary_text

logger = logging.getLogger(__name__)

# -------------------------
# ROUTER PREFIX
# -------------------------
router = APIRouter()


# -----------------------------------------
# Response Schemas
# -----------------------------------------
class SearchResponse(BaseModel):
    results: List[Dict[str, str]]
    match_count: int
    total_count: int
    query: str = ""
    is_final: bool = False
    summary: str
    html: str


class FloorOption(BaseModel):
    value: str
    label: str


class FloorsResponse(BaseModel):
    floors: List[FloorOption]


class ReloadResponse(BaseModel):
    dataset: str
    status: str
    records: int


def get_session(request: Request) -> DirectorySession:
    return request.app.state.session


# -----------------------------------------
# Utility Formatting
# -----------------------------------------
def format_directory(result: SearchResult, showing_all: bool = False) -> SearchResponse:
    return SearchResponse(
        results=result.records,
        match_count=result.match_count,
        total_count=result.total_count,
        query=result.query,
        is_final=result.is_final,
        summary=summary_text(result.match_count, result.total_count, "entries", showing_all),
        html=render_directory_table(result.records, result.query),
    )


def format_faq(result: SearchResult, showing_all: bool = False) -> SearchResponse:
    return SearchResponse(
        results=result.records,
        match_count=result.match_count,
        total_count=result.total_count,
        query=result.query,
        is_final=result.is_final,
        summary=summary_text(result.match_count, result.total_count, "questions", showing_all),
        html=render_faq_cards(result.records, result.query),
    )


# -----------------------------------------
# DIRECTORY
# -----------------------------------------
@router.get("/directory", response_model=SearchResponse)
async def directory_search_route(
    q: str = "",
    floor: Optional[str] = None,
    final: bool = False,
    session: DirectorySession = Depends(get_session),
):
    try:
        await session.ensure_directory()
        result = session.search_directory(q, floor=floor, is_final=final)
        return format_directory(result)
    except DatasetUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.exception("Directory search failed")
        raise HTTPException(status_code=500, detail=f"Directory search failed: {e}")


@router.post("/directory/reset", response_model=SearchResponse)
async def directory_reset_route(session: DirectorySession = Depends(get_session)):
    try:
        await session.ensure_directory()
        return format_directory(session.reset_directory(), showing_all=True)
    except DatasetUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.exception("Directory reset failed")
        raise HTTPException(status_code=500, detail=f"Directory reset failed: {e}")


@router.get("/directory/floors", response_model=FloorsResponse)
async def directory_floors_route(session: DirectorySession = Depends(get_session)):
    try:
        await session.ensure_directory()
        return {"floors": session.floor_options()}
    except DatasetUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.exception("Floor options failed")
        raise HTTPException(status_code=500, detail=f"Floor options failed: {e}")


@router.post("/directory/reload", response_model=ReloadResponse)
async def directory_reload_route(session: DirectorySession = Depends(get_session)):
    status = await session.directory.reload()
    if status == LoadStatus.FAILED:
        raise HTTPException(status_code=503, detail=session.directory.error)
    return {"dataset": "directory", "status": status.value, "records": len(session.directory.records)}


# -----------------------------------------
# FAQ
# -----------------------------------------
@router.get("/faq", response_model=SearchResponse)
async def faq_search_route(
    q: str = "",
    final: bool = False,
    session: DirectorySession = Depends(get_session),
):
    try:
        await session.ensure_faq()
        return format_faq(session.search_faq(q, is_final=final))
    except DatasetUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.exception("FAQ search failed")
        raise HTTPException(status_code=500, detail=f"FAQ search failed: {e}")


@router.post("/faq/reset", response_model=SearchResponse)
async def faq_reset_route(session: DirectorySession = Depends(get_session)):
    try:
        await session.ensure_faq()
        return format_faq(session.reset_faq(), showing_all=True)
    except DatasetUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.exception("FAQ reset failed")
        raise HTTPException(status_code=500, detail=f"FAQ reset failed: {e}")


@router.post("/faq/reload", response_model=ReloadResponse)
async def faq_reload_route(session: DirectorySession = Depends(get_session)):
    status = await session.faq.reload()
    if status == LoadStatus.FAILED:
        raise HTTPException(status_code=503, detail=session.faq.error)
    return {"dataset": "faq", "status": status.value, "records": len(session.faq.records)}


# -----------------------------------------
# STATUS / HEALTH CHECK
# -----------------------------------------
@router.get("/status")
def status_route(session: DirectorySession = Depends(get_session)):
    return session.status()


@router.get("/health")
def health_check():
    return {"status": "ok", "service": "Directory Search API"}
