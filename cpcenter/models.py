"""Database records for content providers and their qualification materials."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, ClassVar, TypeVar

_T = TypeVar("_T")


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value)
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise TypeError(f"cannot read a timestamp from {value!r}")


def _row_values(obj: Any) -> dict[str, Any]:
    row: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        row[f.name] = value.isoformat(sep=" ") if isinstance(value, datetime) else value
    return row


def _from_row(cls: type[_T], row: Mapping[str, Any]) -> _T:
    data = dict(row)
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data or data[f.name] is None:
            continue
        value = data[f.name]
        if f.name in ("create_ts", "modify_ts"):
            value = _to_datetime(value)
        kwargs[f.name] = value
    return cls(**kwargs)


@dataclass
class GpCp:
    """A content provider (row of ``gp_cp``)."""

    TABLE_NAME: ClassVar[str] = "gp_cp"

    id: int = 0
    cp_name: str = ""
    newest_material_id: int = 0
    online_material_id: int = 0
    verify_status: int = 0
    create_ts: datetime = field(default_factory=datetime.now)
    modify_ts: datetime = field(default_factory=datetime.now)

    def as_row(self) -> dict[str, Any]:
        """Return the record as column name to stored value."""
        return _row_values(self)


@dataclass
class GpCpMaterial:
    """A CP qualification material (row of ``gp_cp_material``)."""

    TABLE_NAME: ClassVar[str] = "gp_cp_material"

    id: int = 0
    cp_id: int = 0
    cp_icon: str = ""
    cp_name: str = ""
    verification_images: str = ""
    business_license: str = ""
    website: str = ""
    status: int = 0
    operator: str = ""
    review_comment: str = ""
    create_ts: datetime = field(default_factory=datetime.now)
    modify_ts: datetime = field(default_factory=datetime.now)

    def as_row(self) -> dict[str, Any]:
        """Return the record as column name to stored value."""
        return _row_values(self)


def cp_from_row(row: Mapping[str, Any]) -> GpCp:
    """Build a GpCp from a mapping of column names to values."""
    return _from_row(GpCp, row)


def material_from_row(row: Mapping[str, Any]) -> GpCpMaterial:
    """Build a GpCpMaterial from a mapping of column names to values."""
    return _from_row(GpCpMaterial, row)