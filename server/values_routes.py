"""Record CRUD routes. Guarded by ``AuthGateMiddleware``."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from recordstore.core.types import Record, TimestampedRecord
from recordstore.exceptions import RecordNotFound
from recordstore.storage import ValueStore

router = APIRouter(prefix="/values", tags=["values"])


def get_store(request: Request) -> ValueStore:
    return request.app.state.store


def _dump(record: Record) -> Any:
    if isinstance(record, TimestampedRecord):
        return record.model_dump(mode="json")
    return record


@router.get("")
def list_values(store: ValueStore = Depends(get_store)):
    return {str(rid): _dump(rec) for rid, rec in store.read_all().items()}


@router.get("/{record_id}")
def get_value(record_id: int, store: ValueStore = Depends(get_store)):
    record = store.read(record_id)
    if record is None:
        raise RecordNotFound(record_id)
    return _dump(record)


@router.post("")
def create_value(value: str = Body(...), store: ValueStore = Depends(get_store)):
    store.create(value)
    return Response(status_code=200)


@router.put("/{record_id}")
def update_value(record_id: int, value: str = Body(...), store: ValueStore = Depends(get_store)):
    if not store.update(record_id, value):
        raise RecordNotFound(record_id)
    return Response(status_code=200)


@router.delete("/{record_id}")
def delete_value(record_id: int, store: ValueStore = Depends(get_store)):
    if not store.delete(record_id):
        raise RecordNotFound(record_id)
    return Response(status_code=200)
