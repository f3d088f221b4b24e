"""Settings document validation."""

from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError

from src.api.deps import get_sanitizer
from src.api.schemas import DocumentValidationResponse, RemovalModel
from src.components.sanitizer import HTMLSanitizer
from src.domain.entities import PersistedState
from src.domain.errors import InvalidSettingsError
from src.domain.markup import parse_markup, serialize_markup

router = APIRouter()


@router.post("/validate", response_model=DocumentValidationResponse)
def validate_document(
    document: dict[str, Any] = Body(...),
    sanitizer: HTMLSanitizer = Depends(get_sanitizer),
) -> DocumentValidationResponse:
    """
    Validate a settings document and return it normalized.

    The content is passed through the sanitizer; a document that does not
    match the settings schema is rejected with a 400 and code invalid_settings.
    """
    try:
        state = PersistedState.model_validate(document)
    except ValidationError as e:
        raise InvalidSettingsError(f"Invalid settings document: {e.error_count()} error(s)") from e

    tree, removals = sanitizer.sanitize_with_report(parse_markup(state.content))
    state = state.model_copy(update={"content": serialize_markup(tree)})

    return DocumentValidationResponse(
        document=state.model_dump(by_alias=True, mode="json"),
        removals=[RemovalModel(code=r.code, message=r.message, path=r.path) for r in removals],
    )
