from assoclist.common import Box
from assoclist.map import AssocMap
from assoclist.set import AssocSet

__all__ = [
    "AssocMap",
    "AssocSet",
    "Box",
]
