from typing import Optional

from .exceptions import MissingScaffoldError


class Scaffold:
    __slots__ = ("name", "dna")

    def __init__(self, name: str, dna: str):
        self.name = name
        self.dna = dna

    def __len__(self):
        return len(self.dna)

    def __eq__(self, other):
        if not isinstance(other, Scaffold):
            return NotImplemented
        return self.name == other.name and self.dna == other.dna

    def __repr__(self):
        return f"Scaffold({self.name!r}, {len(self.dna)}bp)"

    def subsequence(self, start: int, length: int) -> str:
        """Return `length` bases starting at the 1-based position `start`."""
        return self.dna[start - 1:start - 1 + length]


class Feature:
    __slots__ = (
        "seq_id",
        "source",
        "type",
        "start",
        "end",
        "score",
        "strand",
        "phase",
        "attributes",
    )

    def __init__(
        self,
        seq_id: str,
        source: str,
        feature_type: str,
        start: int,
        end: int,
        score: str = ".",
        strand: str = ".",
        phase: str = ".",
        attributes: Optional[dict] = None,
    ):
        self.seq_id = seq_id
        self.source = source
        self.type = feature_type
        self.start = start
        self.end = end
        self.score = score
        self.strand = strand
        self.phase = phase
        self.attributes = attributes if attributes is not None else {}

    def __eq__(self, other):
        if not isinstance(other, Feature):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self.__slots__)

    def __repr__(self):
        return (
            f"Feature({self.seq_id}:{self.start}-{self.end}{self.strand} "
            f"{self.type} ID={self.id!r})"
        )

    @property
    def id(self) -> str:
        return self.attribute("ID")

    def attribute(self, key: str) -> str:
        values = self.attributes.get(key)
        return values[0] if values else ""

    def set_attribute(self, key: str, value: str) -> "Feature":
        attributes = {k: list(vs) for k, vs in self.attributes.items()}
        attributes[key] = [value]
        return Feature(
            self.seq_id,
            self.source,
            self.type,
            self.start,
            self.end,
            self.score,
            self.strand,
            self.phase,
            attributes,
        )

    def length(self) -> int:
        return self.end - self.start

    def to_line(self) -> str:
        # repeated keys are written as repeated pairs so they parse back to the same list
        attrib = ";".join(
            f"{key}={value}" for key, values in self.attributes.items() for value in values
        ) or "."
        return "\t".join(
            [
                self.seq_id,
                self.source,
                self.type,
                str(self.start),
                str(self.end),
                self.score,
                self.strand,
                self.phase,
                attrib,
            ]
        )


class GFF:
    __slots__ = ("scaffolds", "features")

    def __init__(self, scaffolds: Optional[list] = None, features: Optional[list] = None):
        self.scaffolds = scaffolds if scaffolds is not None else []
        self.features = features if features is not None else []

    def get_scaffold(self, name: str) -> Optional[Scaffold]:
        for scaffold in self.scaffolds:
            if scaffold.name == name:
                return scaffold
        return None

    def scaffold_index(self) -> dict:
        index = {}
        for scaffold in self.scaffolds:
            index.setdefault(scaffold.name, scaffold)
        return index

    def feature_sequence(self, feature: Feature, index: Optional[dict] = None) -> str:
        if index is None:
            scaffold = self.get_scaffold(feature.seq_id)
        else:
            scaffold = index.get(feature.seq_id)
        if scaffold is None:
            raise MissingScaffoldError(feature.seq_id)
        return scaffold.subsequence(feature.start, feature.length())

    def features_of_type(self, feature_type: str) -> list:
        return [f for f in self.features if f.type == feature_type]

    def feature_types(self) -> list:
        """Distinct feature types in first-seen order."""
        return list(dict.fromkeys(f.type for f in self.features))
