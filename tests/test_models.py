import sqlite3
from datetime import datetime

import pytest

from cpcenter.models import GpCp, GpCpMaterial, cp_from_row, material_from_row


def _material():
    return GpCpMaterial(
        id=1,
        cp_id=123,
        cp_icon="icon.png",
        cp_name="Test CP",
        verification_images='["a.png"]',
        business_license="License ABC",
        website="site.example.com",
        status=2,
        operator="bob",
        review_comment="ok",
        create_ts=datetime(2024, 1, 2, 3, 4, 5),
        modify_ts=datetime(2024, 1, 2, 3, 4, 6),
    )


def _store_and_fetch(table, row):
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.execute(f"CREATE TABLE {table} ({', '.join(row)})")
    placeholders = ", ".join("?" for _ in row)
    conn.execute(f"INSERT INTO {table} VALUES ({placeholders})", list(row.values()))
    fetched = conn.execute(f"SELECT * FROM {table}").fetchone()
    names = [r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")]
    conn.close()
    return fetched, names


def test_material_row_columns():
    row = _material().as_row()
    assert list(row) == [
        "id",
        "cp_id",
        "cp_icon",
        "cp_name",
        "verification_images",
        "business_license",
        "website",
        "status",
        "operator",
        "review_comment",
        "create_ts",
        "modify_ts",
    ]
    assert row["business_license"] == "License ABC"


def test_material_round_trip():
    material = _material()
    assert material_from_row(material.as_row()) == material


def test_cp_round_trip():
    cp = GpCp(id=123, cp_name="Test CP", newest_material_id=1, create_ts=datetime(2024, 5, 6), modify_ts=datetime(2024, 5, 7))
    row = cp.as_row()
    assert row["online_material_id"] == 0
    assert row["verify_status"] == 0
    assert cp_from_row(row) == cp


def test_timestamps_stored_as_text_and_read_back():
    cp = GpCp(id=1, create_ts=datetime(2024, 5, 6, 7, 8, 9))
    row = cp.as_row()
    assert isinstance(row["create_ts"], str)
    assert cp_from_row(row).create_ts == datetime(2024, 5, 6, 7, 8, 9)


def test_from_row_fills_missing_columns_with_defaults():
    material = material_from_row({"id": 7, "cp_id": 9, "review_comment": None})
    assert material.id == 7
    assert material.cp_id == 9
    assert material.review_comment == ""
    assert material.status == 0


def test_from_row_rejects_bad_timestamp():
    with pytest.raises(TypeError):
        cp_from_row({"id": 1, "create_ts": object()})


def test_sqlite_material_row_round_trip():
    material = _material()
    fetched, names = _store_and_fetch(GpCpMaterial.TABLE_NAME, material.as_row())
    assert names == ["gp_cp_material"]
    assert material_from_row(fetched) == material


def test_sqlite_cp_row_round_trip():
    cp = GpCp(id=5, cp_name="Studio", newest_material_id=9, create_ts=datetime(2024, 2, 3), modify_ts=datetime(2024, 2, 4))
    fetched, names = _store_and_fetch(GpCp.TABLE_NAME, cp.as_row())
    assert names == ["gp_cp"]
    assert cp_from_row(fetched) == cp