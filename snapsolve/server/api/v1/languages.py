"""
Source Language Endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from snapsolve.server.schemas import LanguageRead, LanguageUpdate
from snapsolve.server.services.deps import LanguageSettingsDep
from snapsolve.settings.languages import LANGUAGES, available_languages

router = APIRouter()


def _read(code: str) -> LanguageRead:
    english, native = LANGUAGES[code]
    return LanguageRead(code=code, english_name=english, native_name=native)


@router.get("", response_model=List[LanguageRead], summary="List Languages")
async def list_languages() -> List[LanguageRead]:
    return [LanguageRead.model_validate(lang.model_dump()) for lang in available_languages()]


@router.get("/current", response_model=LanguageRead, summary="Get Source Language")
async def get_source_language(languages: LanguageSettingsDep) -> LanguageRead:
    return _read(languages.source_language)


@router.put("/current", response_model=LanguageRead, summary="Set Source Language")
async def set_source_language(request: LanguageUpdate, languages: LanguageSettingsDep) -> LanguageRead:
    try:
        code = languages.set_source_language(request.code)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return _read(code)
