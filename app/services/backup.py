"""JSON backup of every table, and the all-or-nothing restore that replays one."""
from __future__ import annotations

import enum
import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy import Boolean, Date, DateTime, Enum as SQLEnum, Integer, Numeric, insert, text
from sqlalchemy.orm import Session

from app.models import MODELS_IN_DEPENDENCY_ORDER

log = logging.getLogger("uvicorn.error")


def _dump_value(v: Any) -> Any:
    if isinstance(v, enum.Enum):
        return v.value
    if isinstance(v, (datetime, date)):
        return v.isoformat()
    if isinstance(v, Decimal):
        return float(v)
    return v


def dump_all(db: Session) -> dict[str, list[dict[str, Any]]]:
    """Every row of every model, keyed by model name, as JSON-ready dicts."""
    payload: dict[str, list[dict[str, Any]]] = {}
    for name, model in MODELS_IN_DEPENDENCY_ORDER.items():
        cols = model.__table__.columns
        rows = db.query(model).order_by(model.id).all()
        payload[name] = [{c.name: _dump_value(getattr(r, c.key)) for c in cols} for r in rows]
    return payload


def _load_value(column, v: Any) -> Any:
    """Coerce a JSON value to what the column expects. Raises ValueError on bad input."""
    if v is None:
        return None
    t = column.type
    if isinstance(t, SQLEnum) and t.enum_class is not None:
        if isinstance(v, t.enum_class):
            return v
        try:
            return t.enum_class(v)
        except ValueError:
            try:
                return t.enum_class[v]
            except KeyError:
                raise ValueError(f"{column.table.name}.{column.name}: invalid value {v!r}") from None
    if isinstance(t, DateTime):
        if isinstance(v, datetime):
            return v
        try:
            return datetime.fromisoformat(str(v).replace("Z", "+00:00"))
        except ValueError:
            raise ValueError(f"{column.table.name}.{column.name}: invalid datetime {v!r}") from None
    if isinstance(t, Date):
        return v if isinstance(v, date) else date.fromisoformat(str(v))
    if isinstance(t, Numeric):
        try:
            return Decimal(str(v))
        except InvalidOperation:
            raise ValueError(f"{column.table.name}.{column.name}: invalid number {v!r}") from None
    if isinstance(t, Boolean):
        if isinstance(v, str):
            return v.strip().lower() in ("1", "true", "yes")
        return bool(v)
    if isinstance(t, Integer):
        return int(v)
    return v


def _row_for_insert(model, item: dict[str, Any]) -> dict[str, Any]:
    row: dict[str, Any] = {}
    for c in model.__table__.columns:
        if c.name not in item:
            continue
        value = _load_value(c, item[c.name])
        # Let column defaults fill NOT NULL columns the backup left empty
        if value is None and not c.nullable and (c.default is not None or c.server_default is not None):
            continue
        row[c.name] = value
    return row


def _advance_sequences(db: Session) -> None:
    """Explicit ids bypass PostgreSQL serial sequences; move them past the restored max id."""
    for model in MODELS_IN_DEPENDENCY_ORDER.values():
        table = model.__table__.name
        db.execute(
            text(
                f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                f"COALESCE(MAX(id), 1), MAX(id) IS NOT NULL) FROM {table}"
            )
        )


def restore_all(db: Session, data: dict[str, Any]) -> dict[str, int]:
    """Replace every table with the rows in `data`. Does not commit; the caller commits or rolls back.

    Tables are emptied children-first, then filled parents-first. Rows repeating an id already
    seen for the same table are ignored, as are keys that are not columns.
    """
    models = list(MODELS_IN_DEPENDENCY_ORDER.items())
    for _, model in reversed(models):
        db.query(model).delete(synchronize_session=False)
    db.flush()

    counts: dict[str, int] = {}
    for name, model in models:
        items = data.get(name)
        items = items if isinstance(items, list) else []
        seen: set[int] = set()
        n = 0
        for item in items:
            if not isinstance(item, dict):
                raise ValueError(f"{name}: every row must be an object")
            row = _row_for_insert(model, item)
            if row.get("id") is not None:
                if row["id"] in seen:
                    continue
                seen.add(row["id"])
            db.execute(insert(model.__table__).values(**row))
            n += 1
        counts[name] = n

    if db.get_bind().dialect.name == "postgresql":
        _advance_sequences(db)
    db.flush()
    log.info("Restore applied: %s", counts)
    return counts
