"""
Free Credit Endpoints.
"""

from fastapi import APIRouter

from snapsolve.billing.credits import CreditStore
from snapsolve.server.schemas import CreditsAdd, CreditsRead
from snapsolve.server.services.deps import CreditStoreDep

router = APIRouter()


def _read(credits: CreditStore) -> CreditsRead:
    return CreditsRead(
        remaining_credits=credits.remaining_credits,
        has_credits=credits.has_credits,
        display_text=credits.display_text(),
    )


@router.get("", response_model=CreditsRead, summary="Get Credits")
async def get_credits(credits: CreditStoreDep) -> CreditsRead:
    return _read(credits)


@router.post("/add", response_model=CreditsRead, summary="Add Credits")
async def add_credits(request: CreditsAdd, credits: CreditStoreDep) -> CreditsRead:
    credits.add_credits(request.amount)
    return _read(credits)


@router.post("/reset", response_model=CreditsRead, summary="Reset Credits")
async def reset_credits(credits: CreditStoreDep) -> CreditsRead:
    credits.reset()
    return _read(credits)
