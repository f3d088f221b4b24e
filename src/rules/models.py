from pydantic import BaseModel, ConfigDict, Field

from src.domain import validators

_DEFAULT_ALLOWED_TAGS = [
    "h1", "h2", "h3", "h4", "h5", "h6",
    "p", "br", "hr", "div", "span",
    "strong", "em", "b", "i", "u", "s",
    "blockquote", "pre", "code",
    "ul", "ol", "li",
    "a", "img",
    "table", "thead", "tbody", "tr", "td", "th",
]  # fmt: skip

_DEFAULT_ALLOWED_ATTRIBUTES = {
    "*": ["class", "style"],
    "a": ["href", "title", "rel", "target"],
    "img": ["src", "alt", "title", "width", "height", "style"],
    "span": ["style"],
    "div": ["style"],
    "ol": ["type"],
    "table": ["border", "cellpadding", "cellspacing"],
    "td": ["colspan", "rowspan"],
}

_DEFAULT_ALLOWED_STYLES = [
    "color", "background-color", "font-size", "font-weight",
    "font-family", "font-style", "text-decoration", "text-align",
    "padding", "margin", "border", "border-left", "border-radius",
    "box-shadow", "width", "height", "max-width", "max-height",
    "display", "float", "position", "top", "left", "right", "bottom",
    "z-index", "opacity",
]  # fmt: skip


class SanitizerRules(BaseModel):
    allowed_tags: list[str] = Field(default_factory=lambda: list(_DEFAULT_ALLOWED_TAGS))
    allowed_attributes: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in _DEFAULT_ALLOWED_ATTRIBUTES.items()}
    )
    allowed_styles: list[str] = Field(default_factory=lambda: list(_DEFAULT_ALLOWED_STYLES))
    forbidden_styles: list[str] = Field(
        default_factory=lambda: ["position:fixed", "position:absolute", "z-index:9999"]
    )
    drop_tags: list[str] = Field(
        default_factory=lambda: [
            "script", "style", "iframe", "object", "embed", "noscript", "template",
        ]  # fmt: skip
    )
    dangerous_schemes: list[str] = Field(
        default_factory=lambda: list(validators.DANGEROUS_SCHEMES)
    )
    css_color_names: list[str] = Field(
        default_factory=lambda: sorted(validators.CSS_COLOR_NAMES)
    )
    url_base: str = validators.DEFAULT_URL_BASE
    link_rel: str = "noopener nofollow"
    link_target: str = "_blank"


class TranslatorRules(BaseModel):
    named_colors: dict[str, str] = Field(
        default_factory=lambda: dict(validators.DIALECT_COLOR_NAMES)
    )
    default_color: str = validators.DEFAULT_COLOR
    default_size: str = validators.DEFAULT_SIZE
    default_size_unit: str = validators.DEFAULT_SIZE_UNIT
    url_placeholder: str = validators.URL_PLACEHOLDER
    blocked_url_schemes: list[str] = Field(
        default_factory=lambda: list(validators.DIALECT_BLOCKED_SCHEMES)
    )


class HistoryRules(BaseModel):
    capacity: int = Field(default=100, ge=1)


class ExportRules(BaseModel):
    format_version: str = "1.0"
    temp_attributes: list[str] = Field(
        default_factory=lambda: ["contenteditable", "data-image-id", "data-temp"]
    )
    temp_classes: list[str] = Field(default_factory=lambda: ["selected", "image-wrapper"])


class EditorRules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    sanitizer: SanitizerRules = Field(default_factory=SanitizerRules)
    translator: TranslatorRules = Field(default_factory=TranslatorRules)
    history: HistoryRules = Field(default_factory=HistoryRules)
    export: ExportRules = Field(default_factory=ExportRules)
