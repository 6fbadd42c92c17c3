# lexicon_store/core/domain/exceptions.py
import json
from typing import Dict, List, Sequence


class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Validation Errors ---

class LexiconValidationError(DomainError):
    """
    Raised when a batch of lexicon requests is malformed (missing or unknown
    fields, unsupported languages, empty batch). Raised before any store access.
    """
    pass

# --- Precondition Errors ---

class LexiconEntriesNotFoundError(DomainError):
    """Raised when an update targets lexicon entries that do not exist."""
    def __init__(self, keys: Sequence[str]):
        self.keys = list(keys)
        missing: List[Dict[str, str]] = [{"key": key} for key in self.keys]
        super().__init__(
            f"The following lexicon entries do not exist: \n{json.dumps(missing, indent=2)}"
        )

class IncompleteLexiconKeysError(DomainError):
    """Raised when an account-scoped entry's key does not contain its accountId."""
    def __init__(self, entries: Sequence[Dict[str, str]]):
        self.entries = list(entries)
        super().__init__(
            f"The following lexicon entries have incomplete lexicon keys: \n{json.dumps(self.entries, indent=2)}"
        )

# --- Internal Invariant Errors ---

class LexiconIntegrityError(DomainError):
    """
    Raised when the store reports a result that contradicts an earlier check
    (e.g. a bulk update matched fewer documents than were just confirmed to exist).
    Signals a bug or a concurrent external mutation, not a caller error.
    """
    def __init__(self, expected: int, matched: int):
        self.expected = expected
        self.matched = matched
        super().__init__(
            f"Unexpected error: database operation did not match all requested lexicon entries "
            f"(expected {expected}, matched {matched})"
        )
