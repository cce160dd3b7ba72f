"""
Operation-scoped request validation.

Each operation name maps to a pydantic rule set. ``validate_payload`` runs the
rule set over a raw payload and either returns the normalized model or raises
``ValidationError`` carrying every violation message. Update rule sets treat
every field as optional but still check format and enum membership for the
fields that are present; partial settings/metadata updates also enforce a
closed key set before any field is looked at.
"""
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from tenant_admin.core.exceptions import MalformedIdError, ValidationError
from tenant_admin.core.validators import is_valid_tenant_id
from tenant_admin.schemas.management import BulkDelete, BulkStatusUpdate, StatusUpdate
from tenant_admin.schemas.rules import required_message
from tenant_admin.schemas.tenant import (
    TenantCreate, TenantMetadataUpdate, TenantSettingsUpdate, TenantUpdate,
)


ModelT = TypeVar("ModelT", bound=BaseModel)

RULE_SETS: Dict[str, Type[BaseModel]] = {
    "create_tenant": TenantCreate,
    "update_tenant": TenantUpdate,
    "update_tenant_status": StatusUpdate,
    "bulk_update_status": BulkStatusUpdate,
    "bulk_delete_tenants": BulkDelete,
    "update_tenant_settings": TenantSettingsUpdate,
    "update_tenant_metadata": TenantMetadataUpdate,
}


def _error_message(error: Dict[str, Any]) -> str:
    loc = [part for part in error.get("loc", ()) if isinstance(part, str)]
    if error.get("type") == "missing" and loc and error.get("msg") == "Field required":
        return required_message(loc[-1])
    return error.get("msg", "Invalid value")


def collect_violations(exc: PydanticValidationError) -> List[str]:
    """Human-readable messages in payload order, duplicates dropped."""
    return list(dict.fromkeys(_error_message(error) for error in exc.errors()))


def get_rule_set(operation: str) -> Type[BaseModel]:
    try:
        return RULE_SETS[operation]
    except KeyError:
        raise LookupError(f'Validation schema "{operation}" does not exist') from None


def validate_payload(operation: str, payload: Any) -> BaseModel:
    """Validate ``payload`` against the rule set registered for ``operation``."""
    rule_set = get_rule_set(operation)
    if not isinstance(payload, dict):
        raise ValidationError(["Request body must be a JSON object"])
    try:
        return rule_set.model_validate(payload)
    except PydanticValidationError as exc:
        # A malformed id list rejects the whole batch as an id error
        for error in exc.errors():
            if error.get("type") == "malformed_id":
                raise MalformedIdError(error["msg"], invalid_ids=error["ctx"]["invalid_ids"]) from None
        raise ValidationError(collect_violations(exc)) from None


def validate_tenant_id(tenant_id: Any) -> str:
    """Identifier-only operations: reject anything that is not a tenant id."""
    if not is_valid_tenant_id(tenant_id):
        raise MalformedIdError()
    # Ids are stored lower-case
    return tenant_id.lower()
