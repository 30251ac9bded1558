# shareit/utils.py
from typing import Any, Dict, Optional
from datetime import datetime, timezone

def to_id(doc: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Convierte _id -> id en un documento de Mongo.
    Si doc es None, devuelve {}.
    """
    if doc is None:
        return {}
    d = dict(doc)
    if "_id" in d:
        d["id"] = d.pop("_id")
    return d

def to_doc(data: Dict[str, Any]) -> Dict[str, Any]:
    """Inverso de to_id: id -> _id (se omite si es None)."""
    d = dict(data)
    ident = d.pop("id", None)
    if ident is not None:
        d["_id"] = ident
    return d

def as_naive_utc(value: datetime) -> datetime:
    """
    Mongo devuelve fechas naive en UTC; normalizamos las entrantes igual
    para poder compararlas con utcnow().
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
