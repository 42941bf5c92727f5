"""Identifier routes: generate, inspect, stats."""

import threading

from fastapi import APIRouter, Depends, HTTPException, Query, status

from nulid.adapters.uuid_compat import to_uuid
from nulid.core.errors import DecodeError, GenerationError
from nulid.core.identifier import Nulid
from nulid.utils.timestamp import format_nanos, format_timestamp
from nulid.ui.auth import verify_basic_auth

router = APIRouter(prefix="/api/v1", tags=["api"])

MAX_BATCH = 1000

# These will be set by app.py
_generator = None
_issued = 0
_issued_lock = threading.Lock()


def init(generator):
    """Initialize with the generator backing this app."""
    global _generator, _issued
    _generator = generator
    _issued = 0


def describe(nulid):
    """JSON-friendly breakdown of an identifier."""
    timestamp = nulid.timestamp
    try:
        iso = format_nanos(timestamp)
    except OverflowError:
        iso = None
    return {
        "id": str(nulid),
        "timestamp_nanos": timestamp,
        "seconds": nulid.seconds(),
        "subsec_nanos": nulid.subsec_nanos(),
        "tail": nulid.tail,
        "datetime": iso,
        "bytes": nulid.to_bytes().hex(),
        "uuid": str(to_uuid(nulid)),
        "u128": f"0x{nulid.hex()}",
    }


@router.get("/generate")
def generate(count: int = Query(1, ge=1, le=MAX_BATCH)):
    """Generate `count` strictly increasing identifiers.

    Plain def: FastAPI runs it in its threadpool, off the event loop.
    """
    global _issued
    try:
        ids = _generator.generate_many(count)
    except GenerationError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    with _issued_lock:
        _issued += len(ids)
    return {"ids": [str(nulid) for nulid in ids]}


@router.get("/inspect/{value}")
async def inspect(value: str):
    """Decode an identifier into its parts."""
    try:
        nulid = Nulid.parse(value)
    except DecodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return describe(nulid)


@router.get("/stats")
async def stats(username=Depends(verify_basic_auth)):
    """Generator statistics (requires basic auth)."""
    last = _generator.last()
    return {
        "timestamp": format_timestamp(),
        "generator": {
            "issued": _issued,
            "node_id": _generator.node_id(),
            "last": str(last) if last is not None else None,
            "poisoned": _generator.poisoned,
        },
    }
