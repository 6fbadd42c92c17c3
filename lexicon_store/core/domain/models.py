# lexicon_store/core/domain/models.py
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field

from lexicon_store.core.domain.languages import supported_contexts, supported_languages

# --- Enums ---

class UpsertStatus(str, Enum):
    """Outcome of a single upsert in a settled batch."""
    FULFILLED = "fulfilled"
    REJECTED = "rejected"

# --- Field rules ---

def _blank_account_id(value: Any) -> Any:
    # A missing or null accountId means the entry is global.
    return "" if value is None else value

def _stringify_id(value: Any) -> Any:
    # Mongo hands back ObjectId instances
    return None if value is None else str(value)

def _require_values(values: Dict[str, str]) -> Dict[str, str]:
    if not values:
        raise ValueError("at least one translated value is required")
    return values

def _check_locales(values: Dict[str, str]) -> Dict[str, str]:
    unsupported = [locale for locale in values if locale not in supported_languages()]
    if unsupported:
        raise ValueError(f"unsupported languages: {', '.join(unsupported)}")
    return values

def _check_contexts(context: List[str]) -> List[str]:
    unsupported = [tag for tag in context if tag not in supported_contexts()]
    if unsupported:
        raise ValueError(f"unsupported contexts: {', '.join(unsupported)}")
    return context

AccountId = Annotated[str, BeforeValidator(_blank_account_id)]
DocumentId = Annotated[Optional[str], BeforeValidator(_stringify_id)]
# Update payloads: a None value leaves that locale untouched.
LocaleValues = Annotated[Dict[str, Optional[str]], AfterValidator(_check_locales)]
RequiredLocaleValues = Annotated[Dict[str, str], AfterValidator(_require_values), AfterValidator(_check_locales)]
Contexts = Annotated[List[str], AfterValidator(_check_contexts)]

# --- Entities ---

class LexiconEntry(BaseModel):
    """
    A persisted lexicon document.
    Field names follow the stored document (`accountId`, `_id`).
    """
    id: DocumentId = Field(None, alias="_id", description="Store-assigned document id")
    key: str = Field(..., description="Globally unique lexicon key")
    values: Dict[str, str] = Field(default_factory=dict, description="Locale tag -> translated text")
    context: List[str] = Field(default_factory=list, description="Application contexts using this entry")
    account_id: AccountId = Field("", alias="accountId", description="Owning tenant, '' for global entries")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "LexiconEntry":
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        """Returns the stored representation (without `_id` when unassigned)."""
        return self.model_dump(by_alias=True, exclude_none=True)

# --- Requests ---

class NewLexiconEntry(BaseModel):
    """An insert request: the key is derived from `name` (and `accountId`)."""
    name: str = Field(..., min_length=1)
    values: RequiredLocaleValues
    context: Contexts
    account_id: AccountId = Field("", alias="accountId")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

class LexiconEntryUpdate(BaseModel):
    """
    A partial update request.
    `values` is merged locale by locale; `context` replaces the stored list.
    None means "leave untouched".
    """
    key: str = Field(..., min_length=1)
    values: Optional[LocaleValues] = None
    context: Optional[Contexts] = None
    account_id: AccountId = Field("", alias="accountId")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

class LexiconEntryUpsert(BaseModel):
    """A create-or-update request: the full entry is the write payload."""
    key: str = Field(..., min_length=1)
    values: RequiredLocaleValues
    context: Contexts
    account_id: AccountId = Field("", alias="accountId")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

# --- Results ---

class InsertSuccess(BaseModel):
    name: str
    key: str

class InsertFailure(BaseModel):
    name: str
    message: str

class InsertResult(BaseModel):
    """Per-entry outcome of a bulk insert. Partial failures are data, not errors."""
    successes: List[InsertSuccess] = Field(default_factory=list)
    failures: List[InsertFailure] = Field(default_factory=list)

class UpsertWriteResult(BaseModel):
    """What the store reports for a single upsert."""
    matched_count: int = 0
    modified_count: int = 0
    upserted_id: DocumentId = None

class SettledUpsert(BaseModel):
    """One settled upsert: either `value` (fulfilled) or `reason` (rejected) is set."""
    key: str
    status: UpsertStatus
    value: Optional[UpsertWriteResult] = None
    reason: Optional[str] = None

class FindResult(BaseModel):
    lexicons: List[LexiconEntry] = Field(default_factory=list)
