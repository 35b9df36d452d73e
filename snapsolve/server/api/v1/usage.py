"""
Usage Statistics Endpoints.

This module reports how often and how long the solver has been used.
"""

from fastapi import APIRouter, Query

from snapsolve.server.schemas import UsageRead, UsageSummary
from snapsolve.server.services.deps import ReposDep

router = APIRouter()


@router.get(
    "",
    response_model=UsageSummary,
    summary="Get Usage Statistics",
    description="Number of solver runs, their total duration and the most recent entries.",
)
async def get_usage(repos: ReposDep, limit: int = Query(20, ge=1, le=500)) -> UsageSummary:
    entries = await repos.usage.list(limit=limit)
    return UsageSummary(
        count=await repos.usage.count(),
        total_duration=await repos.usage.total_duration(),
        entries=[UsageRead.model_validate(e) for e in entries],
    )
