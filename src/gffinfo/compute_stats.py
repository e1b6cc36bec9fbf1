from collections import Counter
from typing import Optional

from .tools.classes import GFF
from .tools.helpers import format_int, group_by


def avg(total, count) -> Optional[float]:
    """Real division, None when there is nothing to divide by."""
    if not count:
        return None
    return total / count


def n50(lengths) -> Optional[int]:
    """
    Sort ascending and walk the cumulative sum; N50 is the first length whose
    inclusion brings the running total to at least half of the grand total.
    """
    if not lengths:
        return None
    ordered = sorted(lengths)
    half = sum(ordered) / 2
    running = 0
    for length in ordered:
        running += length
        if running >= half:
            return length


def _length_summary(values) -> dict:
    if not values:
        return {"count": 0, "mean": None, "min": None, "max": None, "n50": None}

    return {
        "count": len(values),
        "mean": avg(sum(values), len(values)),
        "min": min(values),
        "max": max(values),
        "n50": n50(values),
    }


def _sequence_composition(dna: str) -> dict:
    counts = Counter(dna)
    a, t, g, c, n = (counts.get(base, 0) for base in "ATGCN")
    gc = avg(g + c, a + t + g + c)
    return {
        "total": len(dna),
        "n_count": n,
        "gc_percent": None if gc is None else 100 * gc,
    }


def compute_gff_stats(gff: GFF) -> dict:
    """
    Compute the summary statistics for a parsed GFF document.

    Args:
        gff: document as returned by parse_gff_lines

    Returns:
        Dictionary with gene/CDS metrics, whole-assembly totals and a per feature
        type block (first-seen type order). Undefined values (nothing to divide by)
        are None.

    Raises:
        MissingScaffoldError: if a feature lies on a scaffold with no sequence
    """
    genes = gff.features_of_type("gene")
    cds = gff.features_of_type("CDS")

    # CDS lines sharing an ID are parts of one coding sequence
    joined_cds = group_by(cds, lambda f: f.id or None)
    total_cds = sum(f.length() for group in joined_cds for f in group)
    avg_joined = avg(total_cds, len(joined_cds))

    scaffold_lengths = [len(s) for s in gff.scaffolds]
    coding = avg(total_cds, sum(scaffold_lengths))

    index = gff.scaffold_index()
    feature_types = {}
    for feature_type in gff.feature_types():
        features = gff.features_of_type(feature_type)
        dna = "".join(gff.feature_sequence(f, index) for f in features)
        feature_types[feature_type] = {
            "length": _length_summary([f.length() for f in features]),
            "composition": _sequence_composition(dna),
        }

    return {
        "genes": {"count": len(genes)},
        "cds": {
            "count": len(cds),
            "per_gene": avg(len(cds), len(genes)),
            "joined_count": len(joined_cds),
            "joined_length": avg_joined,
            "joined_length_aa": None if avg_joined is None else avg_joined / 3,
            "coding_percent": None if coding is None else 100 * coding,
        },
        "total": {
            "length": _length_summary(scaffold_lengths),
            "composition": _sequence_composition("".join(s.dna for s in gff.scaffolds)),
        },
        "scaffold_count": len(gff.scaffolds),
        "feature_types": feature_types,
    }


def _fmt(value) -> str:
    """One decimal place; undefined values render as NaN."""
    return "NaN" if value is None else f"{value:.1f}"


def _fmt_int(value) -> str:
    return "NaN" if value is None else format_int(value)


def _summary_line(summary: dict) -> str:
    return (
        f"Num={format_int(summary['count'])} avg={_fmt(summary['mean'])}bp "
        f"min={_fmt_int(summary['min'])}bp max={_fmt_int(summary['max'])}bp "
        f"N50={_fmt_int(summary['n50'])}bp"
    )


def _composition_line(composition: dict) -> str:
    return (
        f"Total={format_int(composition['total'])}bp Ns={composition['n_count']} "
        f"G+C={_fmt(composition['gc_percent'])}%"
    )


def format_stats_report(stats: dict) -> list:
    """Render the dictionary from compute_gff_stats as the text report lines."""
    cds = stats["cds"]
    lines = [
        f"Num Genes = {stats['genes']['count']}",
        f"Avg CDS per gene = {_fmt(cds['per_gene'])}",
        f"Avg joined CDS length = {_fmt(cds['joined_length'])} ({_fmt(cds['joined_length_aa'])}aa)",
        f"Coding = {_fmt(cds['coding_percent'])}%",
        "Total : ",
        "  " + _summary_line(stats["total"]["length"]),
        "  " + _composition_line(stats["total"]["composition"]),
        f"Num scaffolds = {format_int(stats['scaffold_count'])}",
        "",
    ]

    for feature_type, block in stats["feature_types"].items():
        lines.append(f"{feature_type} : ")
        lines.append("  " + _summary_line(block["length"]))
        lines.append("  " + _composition_line(block["composition"]))

    return lines
