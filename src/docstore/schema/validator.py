"""Model validation for tables and candidate records.

A model maps field names to representative values; only the *kind*
(``type``) of each value matters. Pure logic, no table state.

Usage:
    from docstore.schema.validator import build_shard, validate_model

    model = {"uID": 1, "email": "example@example.com"}
    validate_model(model)
    shard = build_shard(model, {"uID": 7, "nickname": "x"}, "User")
    # {"uID": 7, "email": None}
"""

from collections.abc import Mapping
from typing import Any

from docstore.errors import ModelInvalid, ModelMismatch, ReservedCharacterUsed
from docstore.schema.keypath import DELIMITER


def validate_member(candidate: Any, model_value: Any) -> Any:
    """Check one candidate field value against the model's representative value.

    Args:
        candidate: Value supplied by the caller (``None`` means "not provided").
        model_value: Representative value declared in the model.

    Returns:
        ``None`` when the candidate is absent, otherwise the candidate itself.

    Raises:
        ModelMismatch: If the candidate's type differs from the model value's.

    Examples:
        >>> validate_member(None, 1) is None
        True
        >>> validate_member(5, 1)
        5
        >>> validate_member(True, 1)
        Traceback (most recent call last):
        ...
        docstore.errors.ModelMismatch: expected int, got bool
    """
    if candidate is None:
        return None
    # Exact kind equality: bool is not accepted for int and vice versa
    if type(candidate) is not type(model_value):
        raise ModelMismatch(
            f"expected {type(model_value).__name__}, got {type(candidate).__name__}"
        )
    return candidate


def build_shard(
    model: Mapping[str, Any],
    value: Any,
    table_name: str,
) -> dict[str, Any]:
    """Build the shard a table stores for ``value``.

    The shard holds exactly the model's fields. Missing fields become
    ``None`` and fields unknown to the model are dropped.

    Args:
        model: The table's model.
        value: Candidate record.
        table_name: Used in error messages only.

    Returns:
        A new dict keyed by the model's field names.

    Raises:
        ModelMismatch: If ``value`` is not a mapping or a field has the
            wrong kind.
    """
    if not isinstance(value, Mapping):
        raise ModelMismatch(
            f"Table '{table_name}' expects a mapping, got {type(value).__name__}"
        )

    shard: dict[str, Any] = {}
    for field_name, model_value in model.items():
        try:
            shard[field_name] = validate_member(value.get(field_name), model_value)
        except ModelMismatch as e:
            raise ModelMismatch(f"Table '{table_name}' field '{field_name}': {e}") from e
    return shard


def validate_model(model: Any) -> None:
    """Require ``model`` to be a field-name-to-value mapping.

    Raises:
        ModelInvalid: If ``model`` is not a mapping, a field name is not a
            string, or a representative value is ``None`` (no kind).
    """
    if not isinstance(model, Mapping):
        raise ModelInvalid(
            f"Model must be a mapping of field names, got {type(model).__name__}"
        )
    for field_name, model_value in model.items():
        if not isinstance(field_name, str):
            raise ModelInvalid(f"Field name {field_name!r} is not a string")
        if model_value is None:
            raise ModelInvalid(f"Field '{field_name}' has no representative value")


def validate_table_name(name: Any) -> None:
    """Require a non-empty table name free of the path delimiter."""
    if not isinstance(name, str) or not name:
        raise ModelInvalid(f"Invalid table name: {name!r}")
    if DELIMITER in name:
        raise ReservedCharacterUsed(
            f"Table name '{name}' contains reserved character '{DELIMITER}'"
        )
