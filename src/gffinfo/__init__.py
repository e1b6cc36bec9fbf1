"""
gffinfo - GFF3 annotation summary and clean-up tool

Statistics, overlapping CDS checks, feature ID renumbering and contig removal for GFF3
files with optionally embedded scaffold sequence.
"""

__version__ = "0.1.0"

from .compute_stats import compute_gff_stats, format_stats_report
from .overlap import overlapping_cds
from .tools.helpers import gff_output, parse_gff_lines, read_lines
from .transforms import remove_contigs, set_feature_ids


def load_gff(sources, stdin=None):
    """Read and parse the given files or URLs (stdin when empty) as one GFF document."""
    return parse_gff_lines(read_lines(sources, stdin=stdin))


__all__ = [
    "compute_gff_stats",
    "format_stats_report",
    "gff_output",
    "load_gff",
    "overlapping_cds",
    "parse_gff_lines",
    "remove_contigs",
    "set_feature_ids",
]
