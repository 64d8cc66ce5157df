"""
Normalization of embedded relations returned by PostgREST.

A select such as `empresas:empresa_id (id, nome, ...)` embeds the related row
under a key. Depending on how the relationship is detected, the embed comes
back as a single object, a list, or null (a filter on the embedded resource,
e.g. `empresas.status = 'ativo'`, nulls the embed instead of dropping the
parent row). Every shape is classified into one variant and handled
explicitly here.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

logger = logging.getLogger(__name__)

COMPANY_IDENTITY_FIELDS = ("id", "nome")
GROUP_IDENTITY_FIELDS = ("id", "nome")


@dataclass(frozen=True)
class EmptyJoin:
    """No related row (null, missing, or an empty list)."""


@dataclass(frozen=True)
class SingleJoin:
    """Exactly one related row."""
    record: Dict[str, Any]


@dataclass(frozen=True)
class AmbiguousJoin:
    """More than one related row where one was expected."""
    records: List[Dict[str, Any]] = field(default_factory=list)


JoinResult = Union[EmptyJoin, SingleJoin, AmbiguousJoin]


def classify_join(value: Any) -> JoinResult:
    """
    Classify a raw embedded value.

    Non-mapping items inside a list are ignored before counting.
    """
    if isinstance(value, Mapping):
        return SingleJoin(dict(value))

    if isinstance(value, (list, tuple)):
        records = [dict(item) for item in value if isinstance(item, Mapping)]
        if not records:
            return EmptyJoin()
        if len(records) == 1:
            return SingleJoin(records[0])
        return AmbiguousJoin(records)

    return EmptyJoin()


def _has_identity(record: Mapping[str, Any], required_fields: Sequence[str]) -> bool:
    return all(record.get(name) is not None for name in required_fields)


def unwrap_record(
    value: Any,
    required_fields: Sequence[str]
) -> Optional[Dict[str, Any]]:
    """
    Reduce an embedded value to one usable record.

    Args:
        value: The raw embed (dict, list, None, ...)
        required_fields: Identity fields the record must carry

    Returns:
        The record, or None when the embed is empty or unusable
    """
    joined = classify_join(value)

    if isinstance(joined, EmptyJoin):
        return None

    if isinstance(joined, SingleJoin):
        record = joined.record
    else:
        # To-one relationship returned as a list; keep the first row
        logger.warning(
            f"Embedded relation returned {len(joined.records)} rows, using the first"
        )
        record = joined.records[0]

    if not _has_identity(record, required_fields):
        logger.warning(
            f"Discarding embedded record missing identity fields {list(required_fields)}"
        )
        return None

    return record


def unwrap_company(value: Any) -> Optional[Dict[str, Any]]:
    return unwrap_record(value, COMPANY_IDENTITY_FIELDS)


def unwrap_group(value: Any) -> Optional[Dict[str, Any]]:
    return unwrap_record(value, GROUP_IDENTITY_FIELDS)


def normalize_association(row: Any) -> Optional[Dict[str, Any]]:
    """
    Normalize an `associacoes_empresa_grupo` row with an embedded `empresa`.

    Returns None if the row is not a mapping or lacks grupo_id/empresa_id.
    """
    if not isinstance(row, Mapping):
        return None

    if row.get("grupo_id") is None or row.get("empresa_id") is None:
        return None

    return {
        "grupo_id": row["grupo_id"],
        "empresa_id": row["empresa_id"],
        "empresa_principal": bool(row.get("empresa_principal") or False),
        "status": row.get("status") or "ativo",
        "empresa": unwrap_company(row.get("empresa")),
    }
