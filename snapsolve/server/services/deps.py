"""
Request Dependencies.

Long-lived objects (HTTP clients, preference-backed stores, the entitlement
manager) are created by the application lifespan and kept on ``app.state``.
Repositories and services are built per request around the request's
database session.
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from snapsolve.billing.credits import CreditStore
from snapsolve.billing.entitlements import EntitlementManager
from snapsolve.clients.search import SearchClient
from snapsolve.clients.vision import VisionClient
from snapsolve.core.database.utils import SqlRepoBundle, build_sql_repos
from snapsolve.services.solver import MathSolverService, SearchService
from snapsolve.settings.languages import LanguageSettings


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Uses the session factory installed on ``app.state`` by the lifespan.

    Yields:
        AsyncSession: An asynchronous SQLModel session.
    """
    async with request.app.state.session_maker() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_repos(session: SessionDep) -> SqlRepoBundle:
    return build_sql_repos(session)


def get_vision_client(request: Request) -> VisionClient:
    return request.app.state.vision_client


def get_search_client(request: Request) -> SearchClient:
    return request.app.state.search_client


def get_credit_store(request: Request) -> CreditStore:
    return request.app.state.credits


def get_language_settings(request: Request) -> LanguageSettings:
    return request.app.state.languages


def get_entitlements(request: Request) -> EntitlementManager:
    return request.app.state.entitlements


ReposDep = Annotated[SqlRepoBundle, Depends(get_repos)]
VisionClientDep = Annotated[VisionClient, Depends(get_vision_client)]
SearchClientDep = Annotated[SearchClient, Depends(get_search_client)]
CreditStoreDep = Annotated[CreditStore, Depends(get_credit_store)]
LanguageSettingsDep = Annotated[LanguageSettings, Depends(get_language_settings)]
EntitlementsDep = Annotated[EntitlementManager, Depends(get_entitlements)]


def get_solver_service(
    vision: VisionClientDep, credits: CreditStoreDep, repos: ReposDep, entitlements: EntitlementsDep
) -> MathSolverService:
    return MathSolverService(vision, credits, repos.usage, entitlements)


def get_search_service(search_client: SearchClientDep, repos: ReposDep) -> SearchService:
    return SearchService(search_client, repos.history)


SolverServiceDep = Annotated[MathSolverService, Depends(get_solver_service)]
SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]
