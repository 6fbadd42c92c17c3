# lexicon_store/core/domain/languages.py
# =========================================================================
# LANGUAGE & CONTEXT REGISTRY: Centralized tables for lexicon languages
#
# This module converts between:
# 1. Short codes (2-letter language shorthand, e.g. 'fr')
# 2. Locale tags (the keys of a lexicon entry's `values`, e.g. 'fr-fr')
# 3. Display names (e.g. 'french')
#
# Lookups are total: unknown input falls back to the default language
# (resolve_locale is the exception and returns None).
# =========================================================================

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

# --- 1. CORE DATA MAPPING ---
# Structure: { SHORT_CODE : { 'locale': LOCALE_TAG, 'name': DISPLAY_NAME } }
# Insertion order is the order reported by supported_languages().
LANGUAGE_MAP: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "en": MappingProxyType({"locale": "en-us", "name": "english"}),
    "fr": MappingProxyType({"locale": "fr-fr", "name": "french"}),
    "de": MappingProxyType({"locale": "de-de", "name": "german"}),
    "nl": MappingProxyType({"locale": "nl-nl", "name": "dutch"}),
    "es": MappingProxyType({"locale": "es-ar", "name": "spanish"}),
})

DEFAULT_SHORT_CODE = "en"
DEFAULT_LOCALE = LANGUAGE_MAP[DEFAULT_SHORT_CODE]["locale"]
DEFAULT_DISPLAY_NAME = LANGUAGE_MAP[DEFAULT_SHORT_CODE]["name"]

# --- 2. APPLICATION CONTEXTS ---
# The application surfaces a lexicon entry can be tagged with.
SUPPORTED_CONTEXTS: Tuple[str, ...] = (
    "app",
    "websales",
    "vue",
    "calendarwebsales",
)

# --- 3. REVERSE LOOKUP TABLES ---
LOCALE_TO_SHORT_CODE: Mapping[str, str] = MappingProxyType({
    data["locale"]: code for code, data in LANGUAGE_MAP.items()
})

# --- PUBLIC FUNCTIONS ---

def supported_languages() -> List[str]:
    """Returns the locale tags a lexicon entry may hold values for."""
    return [data["locale"] for data in LANGUAGE_MAP.values()]

def supported_contexts() -> List[str]:
    """Returns every application context a lexicon entry may be tagged with."""
    return list(SUPPORTED_CONTEXTS)

def short_code_to_locale(code: Optional[str]) -> str:
    """
    Returns the locale tag for a short code.
    Example: 'fr' -> 'fr-fr', 'xx' -> 'en-us'
    """
    data = LANGUAGE_MAP.get(code or "")
    return data["locale"] if data else DEFAULT_LOCALE

def locale_to_short_code(locale: Optional[str]) -> str:
    """
    Returns the short code for a locale tag.
    Example: 'de-de' -> 'de', 'xx-yy' -> 'en'
    """
    return LOCALE_TO_SHORT_CODE.get(locale or "", DEFAULT_SHORT_CODE)

def short_code_to_display_name(code: Optional[str]) -> str:
    data = LANGUAGE_MAP.get(code or "")
    return data["name"] if data else DEFAULT_DISPLAY_NAME

def locale_to_display_name(locale: Optional[str]) -> str:
    return short_code_to_display_name(LOCALE_TO_SHORT_CODE.get(locale or ""))

def selected_locales_from_preferences(preferences: Mapping[str, bool]) -> List[Dict[str, str]]:
    """
    Turns a { short_code: enabled } preference map into the locales to display.

    Only short codes flagged True are kept, in the iteration order of `preferences`.
    Example: {'fr': True, 'de': False} -> [{'locale': 'fr-fr', 'displayName': 'french'}]
    """
    return [
        {
            "locale": short_code_to_locale(code),
            "displayName": short_code_to_display_name(code),
        }
        for code, enabled in preferences.items()
        if enabled
    ]

def locale_to_short_code_map() -> Dict[str, str]:
    """Returns { locale: short_code } for every supported locale."""
    result: Dict[str, str] = {}
    for locale in supported_languages():
        result[locale] = locale_to_short_code(locale)
    return result

def locale_to_display_name_map() -> Dict[str, str]:
    """Returns { locale: display_name } for every supported locale."""
    result: Dict[str, str] = {}
    for locale in supported_languages():
        result[locale] = locale_to_display_name(locale)
    return result

def locale_to_empty_string_map() -> Dict[str, str]:
    """Returns { locale: '' } for every supported locale (a blank `values` template)."""
    result: Dict[str, str] = {}
    for locale in supported_languages():
        result[locale] = ""
    return result

def resolve_locale(identifier: Optional[str]) -> Optional[str]:
    """
    Normalizes a locale tag or short code to a supported locale tag.
    Unlike the lookups above there is no fallback: unsupported input returns None.
    Example: 'fr' -> 'fr-fr', 'FR-FR' -> 'fr-fr', 'it' -> None
    """
    if not identifier:
        return None
    ident = identifier.lower().strip()

    # 1. Already a supported locale tag
    if ident in LOCALE_TO_SHORT_CODE:
        return ident

    # 2. Short code
    data = LANGUAGE_MAP.get(ident)
    if data:
        return data["locale"]

    return None
