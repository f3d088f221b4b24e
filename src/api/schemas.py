from typing import Any

from pydantic import BaseModel


# --- Diagnostics ---
class RemovalModel(BaseModel):
    code: str
    message: str
    path: str | None = None


class WarningModel(BaseModel):
    code: str
    message: str
    path: str | None = None


# --- Markup ---
class SanitizeRequest(BaseModel):
    html: str


class SanitizeResponse(BaseModel):
    html: str
    removals: list[RemovalModel] = []


class ToBBCodeRequest(BaseModel):
    html: str
    sanitize: bool = True


class ToBBCodeResponse(BaseModel):
    bbcode: str


class ToHTMLRequest(BaseModel):
    bbcode: str
    sanitize: bool = True


class ToHTMLResponse(BaseModel):
    html: str
    warnings: list[WarningModel] = []


class TextRequest(BaseModel):
    html: str


class TextResponse(BaseModel):
    text: str


# --- Documents ---
class DocumentValidationResponse(BaseModel):
    document: dict[str, Any]
    removals: list[RemovalModel] = []
