from typing import Iterable

from .tools.classes import Feature, GFF
from .tools.exceptions import UnresolvedParentReferenceError

DEFAULT_FEATURE_PREFIX = "FID_"


class IdRemap:
    """Counter and old -> new ID table for a single renumbering pass."""

    __slots__ = ("prefix", "counter", "mapping")

    def __init__(self, prefix: str = DEFAULT_FEATURE_PREFIX):
        self.prefix = prefix
        self.counter = 1
        self.mapping = {}

    def next_id(self, old_id: str) -> str:
        new_id = f"{self.prefix}{self.counter:05d}0"
        self.counter += 1
        self.mapping[old_id] = new_id
        return new_id


def _renumber_id(feature: Feature, remap: IdRemap) -> Feature:
    old_id = feature.attribute("ID")
    if not old_id:
        return feature
    new_id = remap.mapping.get(old_id)
    if new_id is None:
        new_id = remap.next_id(old_id)
    return feature.set_attribute("ID", new_id)


def _renumber_parent(feature: Feature, remap: IdRemap) -> Feature:
    parent = feature.attribute("Parent")
    if not parent:
        return feature
    new_parent = remap.mapping.get(parent)
    if new_parent is None:
        raise UnresolvedParentReferenceError(parent)
    return feature.set_attribute("Parent", new_parent)


def set_feature_ids(gff: GFF, prefix: str = DEFAULT_FEATURE_PREFIX) -> GFF:
    """
    Renumber all features that already have an ID.

    IDs are assigned in document order as <prefix><5 digit counter>0; features sharing
    an ID keep sharing the new one. Parent attributes are then rewritten through the
    same table, a Parent naming an ID that never appeared raises
    UnresolvedParentReferenceError.
    """
    remap = IdRemap(prefix)
    features = [_renumber_id(f, remap) for f in gff.features]
    features = [_renumber_parent(f, remap) for f in features]
    return GFF(list(gff.scaffolds), features)


def remove_contigs(gff: GFF, names: Iterable[str]) -> GFF:
    names = set(names)
    return GFF(
        [s for s in gff.scaffolds if s.name not in names],
        [f for f in gff.features if f.seq_id not in names],
    )
