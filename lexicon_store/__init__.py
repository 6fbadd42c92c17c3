# lexicon_store/__init__.py
"""
Lexicon Store - keyed translation bundles backed by a document database.

This package implements the lexicon service following Hexagonal Architecture
(Ports & Adapters). The public surface re-exported here is the one callers use:
the batch operations from `lexicon_store.service` and the language/context registry.
"""

from lexicon_store.core.domain.keys import generate_lexicon_key
from lexicon_store.core.domain.languages import (
    locale_to_display_name,
    locale_to_display_name_map,
    locale_to_empty_string_map,
    locale_to_short_code,
    locale_to_short_code_map,
    selected_locales_from_preferences,
    short_code_to_display_name,
    short_code_to_locale,
    supported_contexts,
    supported_languages,
)
from lexicon_store.service import create_or_update_many, find, insert_many, update_many

__version__ = "1.0.0"

__all__ = [
    "create_or_update_many",
    "find",
    "generate_lexicon_key",
    "insert_many",
    "locale_to_display_name",
    "locale_to_display_name_map",
    "locale_to_empty_string_map",
    "locale_to_short_code",
    "locale_to_short_code_map",
    "selected_locales_from_preferences",
    "short_code_to_display_name",
    "short_code_to_locale",
    "supported_contexts",
    "supported_languages",
    "update_many",
]
