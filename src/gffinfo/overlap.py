from .tools.classes import Feature, GFF
from .tools.helpers import group_by


def overlap(f1: Feature, f2: Feature) -> bool:
    """Same strand and the closed [start, end] intervals intersect."""
    if f1.strand != f2.strand:
        return False
    a, b = f1.start, f1.end
    c, d = f2.start, f2.end
    return (c <= a <= d) or (c <= b <= d) or (a <= c and b >= d)


def overlapping_pairs(features: list) -> list:
    pairs = []
    for i, f1 in enumerate(features):
        for f2 in features[i + 1:]:
            if overlap(f1, f2):
                pairs.append((f1, f2))
    return pairs


def any_overlap(features: list) -> bool:
    return any(
        overlap(f1, f2) for i, f1 in enumerate(features) for f2 in features[i + 1:]
    )


def overlapping_cds(gff: GFF) -> list:
    """[(scaffold name, has an overlapping CDS pair)] in first-seen scaffold order."""
    by_contig = group_by(gff.features_of_type("CDS"), lambda f: f.seq_id)
    return [(group[0].seq_id, any_overlap(group)) for group in by_contig]


def format_overlap_report(results: list) -> list:
    lines = []
    for name, has_overlap in results:
        lines.append(name)
        lines.append(str(has_overlap))
    return lines
