"""Static per-generator node tag embedded in the top of the tail."""

from nulid.core.bits import TAIL_BITS
from nulid.core.errors import ValueOutOfRangeError

NODE_BITS = 16
NODE_RANDOM_BITS = TAIL_BITS - NODE_BITS
MAX_NODE = (1 << NODE_BITS) - 1


class NodeTag:
    __slots__ = ("value",)

    def __init__(self, value):
        if value < 0 or value > MAX_NODE:
            raise ValueOutOfRangeError("node_id", value, NODE_BITS)
        self.value = value

    def merge(self, random_bits):
        """Tag in the high 16 tail bits over 44 random bits."""
        return (self.value << NODE_RANDOM_BITS) | (random_bits & ((1 << NODE_RANDOM_BITS) - 1))

    @staticmethod
    def extract(tail):
        return tail >> NODE_RANDOM_BITS

    def __eq__(self, other):
        if not isinstance(other, NodeTag):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"NodeTag({self.value})"
