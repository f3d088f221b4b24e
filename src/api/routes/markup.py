"""Conversion endpoints between HTML, BBCode and plain text."""

from fastapi import APIRouter, Depends

from src.api.deps import get_rules, get_sanitizer, get_translator
from src.api.schemas import (
    RemovalModel,
    SanitizeRequest,
    SanitizeResponse,
    TextRequest,
    TextResponse,
    ToBBCodeRequest,
    ToBBCodeResponse,
    ToHTMLRequest,
    ToHTMLResponse,
    WarningModel,
)
from src.components.sanitizer import HTMLSanitizer, SanitizeHtmlInput, run_sanitize_html
from src.components.translator import BBCodeTranslator
from src.domain.markup import flatten_text, parse_markup
from src.rules.models import EditorRules

router = APIRouter()


@router.post("/sanitize", response_model=SanitizeResponse)
def sanitize(
    body: SanitizeRequest,
    rules: EditorRules = Depends(get_rules),
) -> SanitizeResponse:
    """Filter HTML through the allow-list; lists what was removed."""
    result = run_sanitize_html(SanitizeHtmlInput(markup=body.html), rules=rules)
    return SanitizeResponse(
        html=result.markup,
        removals=[
            RemovalModel(code=r.code, message=r.message, path=r.path) for r in result.removals
        ],
    )


@router.post("/to-bbcode", response_model=ToBBCodeResponse)
def to_bbcode(
    body: ToBBCodeRequest,
    sanitizer: HTMLSanitizer = Depends(get_sanitizer),
    translator: BBCodeTranslator = Depends(get_translator),
) -> ToBBCodeResponse:
    markup = sanitizer.sanitize_html(body.html) if body.sanitize else body.html
    return ToBBCodeResponse(bbcode=translator.html_to_dialect(markup))


@router.post("/to-html", response_model=ToHTMLResponse)
def to_html(
    body: ToHTMLRequest,
    sanitizer: HTMLSanitizer = Depends(get_sanitizer),
    translator: BBCodeTranslator = Depends(get_translator),
) -> ToHTMLResponse:
    markup, warnings = translator.to_html_with_warnings(body.bbcode)
    if body.sanitize:
        markup = sanitizer.sanitize_html(markup)
    return ToHTMLResponse(
        html=markup,
        warnings=[WarningModel(code=w.code, message=w.message, path=w.path) for w in warnings],
    )


@router.post("/text", response_model=TextResponse)
def text(body: TextRequest) -> TextResponse:
    return TextResponse(text=flatten_text(parse_markup(body.html)))
