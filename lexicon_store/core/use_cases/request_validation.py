# lexicon_store/core/use_cases/request_validation.py
from typing import Any, List, Mapping, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from lexicon_store.core.domain.exceptions import LexiconValidationError

M = TypeVar("M", bound=BaseModel)

def require_batch(entries: Any, label: str) -> List[Mapping[str, Any]]:
    """
    Ensures `entries` is a non-empty sequence of mappings and returns it as a list.
    """
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence) or len(entries) == 0:
        raise LexiconValidationError(f"{label} must be a non-empty list")

    for entry in entries:
        if not isinstance(entry, Mapping):
            raise LexiconValidationError(f"{label} must only contain mappings, got {type(entry).__name__}")

    return list(entries)

def field_problems(
    entry: Mapping[str, Any],
    required: Sequence[str],
    optional: Sequence[str],
) -> Tuple[List[str], List[str]]:
    """Returns (missing required fields, unknown fields) for one request."""
    missing = [name for name in required if name not in entry]
    unknown = [name for name in entry if name not in required and name not in optional]
    return missing, unknown

def parse_request(model: Type[M], entry: Mapping[str, Any], description: str) -> M:
    """
    Validates field contents through the request model.
    Pydantic errors are re-raised as LexiconValidationError naming the request.
    """
    try:
        return model.model_validate(dict(entry))
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise LexiconValidationError(f"{description} is invalid: {details}") from e
