"""Data access for CP records and CP qualification materials."""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import fields
from datetime import datetime
from typing import Any

from cpcenter.models import GpCp, GpCpMaterial, cp_from_row, material_from_row


class RecordNotFoundError(LookupError):
    """No record matched the lookup."""

    def __init__(self, message: str = "record not found") -> None:
        super().__init__(message)


class CPMaterialRepository(ABC):
    """Storage of CP qualification materials."""

    @abstractmethod
    def create_material(self, material: GpCpMaterial) -> None:
        """Store a new material."""

    @abstractmethod
    def update_material(self, material_id: int, updates: Mapping[str, Any]) -> int:
        """Set the given columns of a material; return the number of rows changed."""

    @abstractmethod
    def get_material_by_id(self, material_id: int) -> GpCpMaterial:
        """Return the material with this id or raise RecordNotFoundError."""

    @abstractmethod
    def get_material_by_cp_id(self, cp_id: int) -> GpCpMaterial:
        """Return the first material of a CP or raise RecordNotFoundError."""


class CPRepository(ABC):
    """Storage of content providers."""

    @abstractmethod
    def create_cp(self, cp: GpCp) -> None:
        """Store a new CP."""

    @abstractmethod
    def get_cp_by_id(self, cp_id: int) -> GpCp:
        """Return the CP with this id or raise RecordNotFoundError."""

    @abstractmethod
    def update_cp(self, cp_id: int, updates: Mapping[str, Any]) -> None:
        """Set the given columns of a CP; raise RecordNotFoundError if none matched."""


_SCHEMA = """
CREATE TABLE IF NOT EXISTS gp_cp (
    id INTEGER PRIMARY KEY,
    cp_name TEXT NOT NULL,
    newest_material_id INTEGER NOT NULL DEFAULT 0,
    online_material_id INTEGER NOT NULL DEFAULT 0,
    verify_status INTEGER NOT NULL DEFAULT 0,
    create_ts TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    modify_ts TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS gp_cp_material (
    id INTEGER PRIMARY KEY,
    cp_id INTEGER NOT NULL,
    cp_icon TEXT NOT NULL DEFAULT '',
    cp_name TEXT NOT NULL,
    verification_images TEXT,
    business_license TEXT NOT NULL DEFAULT '',
    website TEXT,
    status INTEGER NOT NULL DEFAULT 0,
    operator TEXT NOT NULL DEFAULT '',
    review_comment TEXT,
    create_ts TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    modify_ts TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the gp_cp and gp_cp_material tables if they are missing."""
    with conn:
        conn.executescript(_SCHEMA)


def _adapt(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, int) and not isinstance(value, bool):
        return int(value)
    return value


def _insert(conn: sqlite3.Connection, table: str, row: Mapping[str, Any]) -> None:
    columns = ", ".join(row)
    marks = ", ".join("?" for _ in row)
    with conn:
        conn.execute(
            f"INSERT INTO {table} ({columns}) VALUES ({marks})",
            [_adapt(v) for v in row.values()],
        )


def _update(
    conn: sqlite3.Connection,
    table: str,
    allowed: frozenset[str],
    record_id: int,
    updates: Mapping[str, Any],
) -> int:
    unknown = sorted(set(updates) - allowed)
    if unknown:
        raise ValueError(f"unknown column(s) for {table}: {', '.join(unknown)}")
    assignments = ", ".join(f"{column} = ?" for column in updates)
    params = [_adapt(v) for v in updates.values()] + [record_id]
    with conn:
        cursor = conn.execute(f"UPDATE {table} SET {assignments} WHERE id = ?", params)
    return cursor.rowcount


def _fetch_first(conn: sqlite3.Connection, sql: str, params: tuple[Any, ...]) -> dict[str, Any]:
    cursor = conn.execute(sql, params)
    row = cursor.fetchone()
    if row is None:
        raise RecordNotFoundError()
    names = [column[0] for column in cursor.description]
    return dict(zip(names, row))


_MATERIAL_COLUMNS = frozenset(f.name for f in fields(GpCpMaterial))
_CP_COLUMNS = frozenset(f.name for f in fields(GpCp))


class SqliteCPMaterialRepository(CPMaterialRepository):
    """Materials kept in an SQLite database."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def create_material(self, material: GpCpMaterial) -> None:
        _insert(self._conn, GpCpMaterial.TABLE_NAME, material.as_row())

    def update_material(self, material_id: int, updates: Mapping[str, Any]) -> int:
        if not updates:
            return 0
        return _update(
            self._conn, GpCpMaterial.TABLE_NAME, _MATERIAL_COLUMNS, material_id, updates
        )

    def get_material_by_id(self, material_id: int) -> GpCpMaterial:
        row = _fetch_first(
            self._conn,
            f"SELECT * FROM {GpCpMaterial.TABLE_NAME} WHERE id = ? ORDER BY id LIMIT 1",
            (material_id,),
        )
        return material_from_row(row)

    def get_material_by_cp_id(self, cp_id: int) -> GpCpMaterial:
        row = _fetch_first(
            self._conn,
            f"SELECT * FROM {GpCpMaterial.TABLE_NAME} WHERE cp_id = ? ORDER BY id LIMIT 1",
            (cp_id,),
        )
        return material_from_row(row)


class SqliteCPRepository(CPRepository):
    """Content providers kept in an SQLite database."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def create_cp(self, cp: GpCp) -> None:
        _insert(self._conn, GpCp.TABLE_NAME, cp.as_row())

    def get_cp_by_id(self, cp_id: int) -> GpCp:
        row = _fetch_first(
            self._conn,
            f"SELECT * FROM {GpCp.TABLE_NAME} WHERE id = ? ORDER BY id LIMIT 1",
            (cp_id,),
        )
        return cp_from_row(row)

    def update_cp(self, cp_id: int, updates: Mapping[str, Any]) -> None:
        if not updates:
            raise ValueError("update data is empty")
        if _update(self._conn, GpCp.TABLE_NAME, _CP_COLUMNS, cp_id, updates) == 0:
            raise RecordNotFoundError()