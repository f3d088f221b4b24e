import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.components.sanitizer import HTMLSanitizer, create_sanitizer
from src.components.translator import BBCodeTranslator, create_translator
from src.rules.loader import load_rules_or_default
from src.rules.models import EditorRules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get("EDITOR_RULES_PATH", self.base_dir / "rules.yaml"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> EditorRules:
    return load_rules_or_default(settings.rules_path)


# --- Services ---
def get_sanitizer(rules: EditorRules = Depends(get_rules)) -> HTMLSanitizer:
    return create_sanitizer(rules.sanitizer)


def get_translator(rules: EditorRules = Depends(get_rules)) -> BBCodeTranslator:
    return create_translator(rules.translator)
