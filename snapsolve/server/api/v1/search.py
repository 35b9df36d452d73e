"""
Search Endpoints.

Forwards a text query to the search proxy and records it in the history.
"""

from fastapi import APIRouter

from snapsolve.formatting.sources import clean_search_output
from snapsolve.server.schemas import SearchRequest, SearchResponse, SourceLink
from snapsolve.server.services.deps import SearchServiceDep

router = APIRouter()


@router.post(
    "",
    response_model=SearchResponse,
    summary="Search",
    description="Answer a query as Markdown with a source link. Repeated queries are not added to the history twice.",
    responses={400: {"description": "Empty query"}, 502: {"description": "Search endpoint failure"}},
)
async def search(request: SearchRequest, service: SearchServiceDep) -> SearchResponse:
    result = await service.search(request.query)
    source = SourceLink(label=result.source[0], url=result.source[1]) if result.source else None
    return SearchResponse(
        query=result.query,
        output=result.output,
        cleaned_output=clean_search_output(result.output),
        source=source,
        saved_to_history=result.saved,
    )
