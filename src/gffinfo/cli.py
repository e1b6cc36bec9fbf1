#!/usr/bin/env python3
"""
Command-line interface for gffinfo - GFF3 annotation summary and clean-up tool
"""

import argparse
import json
import sys
from pathlib import Path

import requests

from gffinfo import (
    compute_gff_stats,
    format_stats_report,
    gff_output,
    load_gff,
    overlapping_cds,
    remove_contigs,
    set_feature_ids,
)
from gffinfo.overlap import format_overlap_report, overlapping_pairs
from gffinfo.tools.exceptions import GffError
from gffinfo.transforms import DEFAULT_FEATURE_PREFIX


def log(message, verbose=True):
    if verbose:
        print(message, file=sys.stderr)


def write_lines(lines, output=None):
    text = "".join(line + "\n" for line in lines)
    if output:
        print(f"Writing to file : {output}")
        with open(output, "w") as f:
            f.write(text)
    else:
        sys.stdout.write(text)


def run_stats(gff, args):
    stats = compute_gff_stats(gff)
    if args.json:
        write_lines([json.dumps(stats, indent=2 if args.pretty else None)], args.output)
    else:
        write_lines(format_stats_report(stats), args.output)


def run_overlapping_cds(gff, args):
    if args.verbose:
        cds = gff.features_of_type("CDS")
        for f1, f2 in overlapping_pairs(cds):
            log(f"Overlapping CDS : {f1.to_line()} | {f2.to_line()}")
    write_lines(format_overlap_report(overlapping_cds(gff)))


def read_contig_names(args):
    names = list(args.remove_contig or [])
    if args.remove_contigs_file:
        with open(args.remove_contigs_file) as f:
            names.extend(line.strip() for line in f if line.strip())
    return names


def run_process(gff, args):
    names = read_contig_names(args)
    if names:
        before = len(gff.features)
        gff = remove_contigs(gff, names)
        log(f"Removed {len(names)} contigs ({before - len(gff.features)} features)", args.verbose)
    if args.update_ids:
        gff = set_feature_ids(gff, args.feature_prefix)
    write_lines(gff_output(gff, fasta=args.fasta), args.output)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="gffinfo",
        description="Summarise, check and rewrite GFF3 annotation files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s stats annotation.gff3
  %(prog)s stats --json --pretty https://example.com/annotation.gff3.gz
  %(prog)s overlapping-cds annotation.gff3
  %(prog)s process --update-ids --feature-prefix GENE_ annotation.gff3 -o renamed.gff3
  %(prog)s process --remove-contig chrUn --fasta < annotation.gff3
        """
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print progress and diagnostics to stderr"
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "files",
        nargs="*",
        help="GFF3 files or URLs, read in order (default: stdin)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    stats_parser = subparsers.add_parser(
        "stats", parents=[common], help="Output some stats about the GFF and its features"
    )
    stats_parser.add_argument("-o", "--output", type=Path, help="Output file path (default: stdout)")
    stats_parser.add_argument("--json", action="store_true", help="Output statistics as JSON")
    stats_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output with indentation"
    )
    stats_parser.set_defaults(handler=run_stats)

    overlap_parser = subparsers.add_parser(
        "overlapping-cds", parents=[common], help="Check if there are any overlapping CDS features"
    )
    overlap_parser.set_defaults(handler=run_overlapping_cds)

    process_parser = subparsers.add_parser(
        "process", parents=[common], help="Write the GFF back out, optionally renamed or filtered"
    )
    process_parser.add_argument("-o", "--output", type=Path, help="Output file path (default: stdout)")
    process_parser.add_argument(
        "--update-ids",
        action="store_true",
        help="Rename all feature IDs in the GFF"
    )
    process_parser.add_argument(
        "--feature-prefix",
        default=DEFAULT_FEATURE_PREFIX,
        help="Prefix to use when renaming all feature IDs (default: %(default)s)"
    )
    process_parser.add_argument(
        "--remove-contig",
        action="append",
        metavar="NAME",
        help="Drop this contig and its features (may be repeated)"
    )
    process_parser.add_argument(
        "--remove-contigs-file",
        type=Path,
        help="File with one contig name per line to drop"
    )
    process_parser.add_argument(
        "--fasta",
        action="store_true",
        help="Write sequences in a ##FASTA section after the features instead of inline ##DNA blocks"
    )
    process_parser.set_defaults(handler=run_process)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        gff = load_gff(args.files)
        log(
            f"Parsed {len(gff.features)} features on {len(gff.scaffolds)} scaffolds",
            args.verbose,
        )
        args.handler(gff, args)

    except (GffError, OSError, UnicodeDecodeError, requests.RequestException) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
