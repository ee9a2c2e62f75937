from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .domain import JOB_CARD_STATUSES, PRODUCT_TYPES, ROLES
from .errors import InvalidAmount, ValidationError
from .time_utils import parse_iso_datetime


# Maximum money value: $9,999,999.99 (999,999,999 cents)
MAX_PRICE_CENTS = 999_999_999
MAX_QUANTITY = 1_000_000


@dataclass(frozen=True)
class FieldSpec:
    """
    kind:
    - "str":      stripped text, max_length enforced, blank rejected unless allow_blank
    - "amount":   non-negative int (cents or counts); InvalidAmount on anything else
    - "datetime": ISO-8601 string or datetime, normalized to UTC-naive
    - "str_list": list of non-blank strings
    """
    kind: str
    max_length: int | None = None
    choices: tuple | None = None
    allow_blank: bool = False
    nullable: bool = False
    maximum: int | None = None


@dataclass(frozen=True)
class ValidationPolicy:
    """
    Central policy layer:
    - fields: what clients are allowed to set (security boundary); derived
      totals are deliberately absent so a caller can never supply them
    - required_on_create: fields required for create
    """
    fields: dict[str, FieldSpec]
    required_on_create: frozenset = field(default_factory=frozenset)


def _coerce_amount(key: str, value: Any, maximum: int | None) -> int:
    # Integers - strict validation to reject floats and scientific notation
    if isinstance(value, bool):
        raise InvalidAmount(f"{key} must be an integer", details={"field": key})
    if isinstance(value, int):
        result = value
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise InvalidAmount(f"{key} must be an integer", details={"field": key})
        if "e" in stripped.lower():
            raise InvalidAmount(
                f"{key} must be a plain integer (scientific notation not allowed)",
                details={"field": key},
            )
        if "." in stripped:
            raise InvalidAmount(f"{key} must be an integer (no decimals)", details={"field": key})
        try:
            result = int(stripped)
        except ValueError:
            raise InvalidAmount(f"{key} must be an integer", details={"field": key})
    elif isinstance(value, float):
        raise InvalidAmount(f"{key} must be an integer, not a decimal", details={"field": key})
    else:
        raise InvalidAmount(f"{key} must be an integer", details={"field": key})

    if result < 0:
        raise InvalidAmount(f"{key} must be >= 0", details={"field": key, "value": result})
    if maximum is not None and result > maximum:
        raise InvalidAmount(f"{key} cannot exceed {maximum}", details={"field": key, "value": result})
    return result


def _coerce_value(key: str, spec: FieldSpec, value: Any):
    if spec.kind == "amount":
        return _coerce_amount(key, value, spec.maximum)

    if spec.kind == "datetime":
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                dt = parse_iso_datetime(value)
            except ValueError:
                raise ValidationError(f"{key} must be an ISO-8601 datetime")
            if dt is None:
                raise ValidationError(f"{key} must be an ISO-8601 datetime")
            return dt
        raise ValidationError(f"{key} must be a datetime")

    if spec.kind == "str_list":
        if not isinstance(value, list):
            raise ValidationError(f"{key} must be a list of strings")
        items = []
        for item in value:
            if not isinstance(item, str) or not item.strip():
                raise ValidationError(f"{key} entries must be non-blank strings")
            items.append(item.strip())
        return items

    # Strings / Text
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ValidationError(f"{key} must be a string")
    text = str(value).strip()
    if not text and not spec.allow_blank:
        raise ValidationError(f"{key} cannot be blank")
    if spec.max_length and len(text) > spec.max_length:
        raise ValidationError(f"{key} exceeds max length {spec.max_length}")
    if spec.choices is not None and text not in spec.choices:
        raise ValidationError(
            f"{key} must be one of: {', '.join(spec.choices)}",
            details={"field": key, "value": text},
        )
    return text


def validate_payload(*, payload: Any, policy: ValidationPolicy, partial: bool) -> dict:
    """
    Validates + normalizes incoming JSON against a policy.
    Returns a cleaned patch dict with only writable fields.

    partial=False: create semantics (enforce required_on_create)
    partial=True: patch semantics (validate only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    if not partial:
        missing = sorted(f for f in policy.required_on_create if f not in payload)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    # Reject unknown / non-writable fields
    for k in payload.keys():
        if k not in policy.fields:
            raise ValidationError(f"Field not allowed: {k}", details={"field": k})

    patch: dict = {}
    for k, raw in payload.items():
        spec = policy.fields[k]
        if raw is None:
            if not spec.nullable:
                raise ValidationError(f"{k} cannot be null")
            patch[k] = None
            continue
        patch[k] = _coerce_value(k, spec, raw)

    return patch


PRODUCT_POLICY = ValidationPolicy(
    fields={
        "name": FieldSpec("str", max_length=255),
        "type": FieldSpec("str", choices=PRODUCT_TYPES),
        "category": FieldSpec("str", max_length=128, allow_blank=True),
        "quantity": FieldSpec("amount", maximum=MAX_QUANTITY),
        "unit_price_cents": FieldSpec("amount", maximum=MAX_PRICE_CENTS),
        "min_stock": FieldSpec("amount", maximum=MAX_QUANTITY),
        "brand": FieldSpec("str", max_length=128, allow_blank=True),
        "description": FieldSpec("str", allow_blank=True),
    },
    required_on_create=frozenset({"name", "type"}),
)


JOB_CARD_POLICY = ValidationPolicy(
    fields={
        "customer_name": FieldSpec("str", max_length=255),
        "customer_phone": FieldSpec("str", max_length=64, allow_blank=True),
        "vehicle_number": FieldSpec("str", max_length=64),
        "vehicle_model": FieldSpec("str", max_length=255, allow_blank=True),
        "issue_description": FieldSpec("str", allow_blank=True),
        "services_provided": FieldSpec("str_list"),
        "labor_cost_cents": FieldSpec("amount", maximum=MAX_PRICE_CENTS),
        "notes": FieldSpec("str", allow_blank=True),
        "estimated_completion": FieldSpec("datetime", nullable=True),
    },
    required_on_create=frozenset({"customer_name", "vehicle_number"}),
)


JOB_CARD_STATUS_POLICY = ValidationPolicy(
    fields={"status": FieldSpec("str", choices=JOB_CARD_STATUSES)},
    required_on_create=frozenset({"status"}),
)


USER_POLICY = ValidationPolicy(
    fields={
        "name": FieldSpec("str", max_length=255),
        "email": FieldSpec("str", max_length=255),
        "role": FieldSpec("str", choices=ROLES),
    },
    required_on_create=frozenset({"name", "email", "role"}),
)


def enforce_rules_user(patch: dict) -> None:
    if "email" in patch:
        email = patch["email"]
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise ValidationError("email must be a valid address", details={"field": "email"})
        patch["email"] = email.lower()


def validate_part_requests(raw: Any) -> list[tuple[int, int]]:
    """
    Parse job-card part requests: [{"product_id": 1, "quantity": 2}, ...].
    quantity defaults to 1 and must be positive.
    """
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError("parts must be a list")
    requests = []
    for entry in raw:
        if not isinstance(entry, dict) or "product_id" not in entry:
            raise ValidationError("each part needs a product_id")
        product_id = _coerce_amount("product_id", entry["product_id"], None)
        quantity = _coerce_amount("quantity", entry.get("quantity", 1), MAX_QUANTITY)
        if quantity < 1:
            raise InvalidAmount("quantity must be at least 1", details={"field": "quantity"})
        requests.append((product_id, quantity))
    return requests
