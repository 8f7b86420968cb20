"""Derive table headers and rows from a sequence of records.

Supported record kinds:

* dataclass instances; a field can rename its column with
  ``field(metadata={"alias": "Name"})``;
* pydantic models; ``serialization_alias`` then ``alias`` name the column;
* named tuples;
* mappings, keyed by column name.

Columns follow declaration order (insertion order for mappings).
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from .errors import InvalidDataShape

ALIAS_METADATA_KEY = "alias"


def _is_namedtuple(value: object) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def _record_kind(record: object) -> str:
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return "dataclass"
    if isinstance(record, BaseModel):
        return "pydantic"
    if _is_namedtuple(record):
        return "namedtuple"
    if isinstance(record, Mapping):
        return "mapping"
    raise InvalidDataShape(
        f"records must be dataclasses, pydantic models, named tuples or mappings, "
        f"got {type(record).__name__}"
    )


def headers_for(record: object) -> list[str]:
    """Column headers for *record*'s type."""
    kind = _record_kind(record)
    if kind == "dataclass":
        return [
            str(field.metadata.get(ALIAS_METADATA_KEY) or field.name)
            for field in dataclasses.fields(record)  # type: ignore[arg-type]
        ]
    if kind == "pydantic":
        return [
            info.serialization_alias or info.alias or name
            for name, info in type(record).model_fields.items()  # type: ignore[union-attr]
        ]
    if kind == "namedtuple":
        return list(type(record)._fields)  # type: ignore[attr-defined]
    return [str(key) for key in record]  # type: ignore[union-attr]


def row_for(record: object) -> list[Any]:
    """Field values of *record* in declaration order."""
    kind = _record_kind(record)
    if kind == "dataclass":
        return [getattr(record, field.name) for field in dataclasses.fields(record)]  # type: ignore[arg-type]
    if kind == "pydantic":
        return [getattr(record, name) for name in type(record).model_fields]  # type: ignore[union-attr]
    if kind == "namedtuple":
        return list(record)  # type: ignore[call-overload]
    return list(record.values())  # type: ignore[union-attr]


def records_to_rows(records: object) -> tuple[list[str], list[list[Any]]]:
    """Convert a sequence of uniform records into ``(headers, rows)``.

    Raises:
        InvalidDataShape: *records* is not a sequence, holds something other
            than a supported record, or mixes record types (or key sets).
    """
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Sequence):
        raise InvalidDataShape(
            f"records must be a sequence of records, got {type(records).__name__}"
        )
    if not records:
        return [], []

    first = records[0]
    headers = headers_for(first)
    record_type = type(first)
    first_keys = list(first.keys()) if isinstance(first, Mapping) else None

    rows: list[list[Any]] = []
    for index, record in enumerate(records):
        if type(record) is not record_type:
            raise InvalidDataShape(
                f"record {index} is a {type(record).__name__}, expected {record_type.__name__}"
            )
        if first_keys is not None:
            keys = list(record.keys())
            if set(keys) != set(first_keys):
                raise InvalidDataShape(f"record {index} has keys {keys}, expected {first_keys}")
            rows.append([record[key] for key in first_keys])
            continue
        rows.append(row_for(record))
    return headers, rows
