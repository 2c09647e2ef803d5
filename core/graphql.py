"""The fixed user query and parsing of its response shape."""

from __future__ import annotations

import math
from typing import Any

from analysis.dto import XP, TransactionRecord, UserData, UserProfile
from analysis.errors import FormatError
from analysis.profile import parse_date_of_birth

USER_QUERY_TEMPLATE = """
query {
  user {
    firstName
    lastName
    auditRatio
    attrs
    transactions(where: {event: {id: {_eq: %(event_id)d}}}) {
      type
      amount
      object {
        name
      }
    }
  }
}
"""


def build_user_query(event_id: int) -> str:
    """Return the user query filtered to a single event id."""

    return USER_QUERY_TEMPLATE % {"event_id": int(event_id)}


def parse_user_payload(payload: Any) -> UserData:
    """Parse a GraphQL response body into UserData.

    Args:
        payload: Decoded JSON body shaped
            `{"data": {"user": [{firstName, lastName, auditRatio, attrs, transactions}]}}`.

    Returns:
        UserData for the first user entry.

    Raises:
        FormatError: When any expected field is missing or has the wrong type.
    """

    data = _require_mapping(payload, "payload")
    body = _require_mapping(data.get("data"), "data")
    users = body.get("user")
    if not isinstance(users, list) or not users:
        raise FormatError("expected a non-empty list", field="data.user")
    user = _require_mapping(users[0], "data.user[0]")

    first_name = _require_str(user.get("firstName"), "firstName")
    last_name = _require_str(user.get("lastName"), "lastName")

    ratio = user.get("auditRatio")
    if isinstance(ratio, bool) or not isinstance(ratio, (int, float)):
        raise FormatError(f"expected a number, got {ratio!r}", field="auditRatio")
    try:
        audit_ratio = float(ratio)
    except OverflowError as exc:
        raise FormatError("number out of range", field="auditRatio") from exc
    if not math.isfinite(audit_ratio):
        raise FormatError(f"expected a finite number, got {ratio!r}", field="auditRatio")

    attrs = _require_mapping(user.get("attrs"), "attrs")
    profile = UserProfile(
        first_name=first_name,
        last_name=last_name,
        audit_ratio=audit_ratio,
        date_of_birth=parse_date_of_birth(attrs.get("dateOfBirth")),
    )

    raw_transactions = user.get("transactions")
    if not isinstance(raw_transactions, list):
        raise FormatError("expected a list", field="transactions")
    transactions = tuple(
        _parse_transaction(item, field=f"transactions[{index}]") for index, item in enumerate(raw_transactions)
    )
    return UserData(profile=profile, transactions=transactions)


def _parse_transaction(item: Any, *, field: str) -> TransactionRecord:
    record = _require_mapping(item, field)
    kind = _require_str(record.get("type"), f"{field}.type")

    amount = record.get("amount")
    if isinstance(amount, float) and amount.is_integer():
        amount = int(amount)
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise FormatError(f"expected a non-negative integer, got {amount!r}", field=f"{field}.amount")

    obj = record.get("object")
    name = obj.get("name") if isinstance(obj, dict) else None
    if kind == XP:
        name = _require_str(name, f"{field}.object.name")
    return TransactionRecord(type=kind, amount=amount, object_name=name if isinstance(name, str) else None)


def _require_mapping(value: Any, field: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise FormatError(f"expected an object, got {type(value).__name__}", field=field)
    return value


def _require_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise FormatError(f"expected a string, got {value!r}", field=field)
    return value
