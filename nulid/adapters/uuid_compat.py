"""UUID interop: the same 128 bits viewed as a uuid.UUID."""

import uuid

from nulid.core.identifier import Nulid


def to_uuid(nulid):
    return uuid.UUID(int=nulid.value)


def from_uuid(value):
    """Accepts a uuid.UUID or any string uuid.UUID can parse."""
    if not isinstance(value, uuid.UUID):
        value = uuid.UUID(str(value))
    return Nulid(value.int)
