# lexicon_store/core/domain/keys.py
import uuid
from typing import Optional


def generate_lexicon_key(account_id: str, name: str, field: Optional[str] = None) -> str:
    """
    Builds a collision-resistant key for a tenant-scoped lexicon entry.

    Format: '{name}-{field}-{account_id}-{uuid4}', or '{name}-{account_id}-{uuid4}'
    when no field is given (the form used when inserting account entries).

    The random UUID makes collisions improbable; the unique index on `key`
    in the store is what actually guarantees uniqueness.
    """
    parts = [name]
    if field is not None:
        parts.append(field)
    parts.extend([account_id, str(uuid.uuid4())])
    return "-".join(parts)


def key_belongs_to_account(key: str, account_id: str) -> bool:
    """True when `account_id` appears as a whole dash-delimited component of `key`."""
    return f"-{account_id}-" in f"-{key}-"
