"""
Search History Endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from snapsolve.server.schemas import SearchHistoryRead
from snapsolve.server.services.deps import ReposDep

router = APIRouter()


@router.get("", response_model=List[SearchHistoryRead], summary="List Search History")
async def list_history(
    repos: ReposDep,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> List[SearchHistoryRead]:
    """Newest searches first."""
    items = await repos.history.list(limit=limit, offset=offset)
    return [SearchHistoryRead.model_validate(item) for item in items]


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete History Item")
async def delete_history_item(item_id: str, repos: ReposDep) -> None:
    if not await repos.history.delete_item(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"History item {item_id} not found")


@router.delete("", summary="Clear Search History")
async def clear_history(repos: ReposDep):
    return {"deleted": await repos.history.clear_all()}
