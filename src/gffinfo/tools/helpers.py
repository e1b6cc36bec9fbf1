import gzip
import sys
from contextlib import contextmanager
from typing import Iterable, Optional

import requests

from .classes import Feature, GFF, Scaffold
from .exceptions import MalformedAttributeError, MalformedFeatureLineError

GZIP_MAGIC = b"\x1f\x8b"
DNA_LINE_WIDTH = 40


@contextmanager
def open_stream(path, chunk_size=1024):
    """
    Yield a line-by-line text stream for local or HTTP/HTTPS files.
    Supports gzip automatically.
    """
    is_url = path.startswith(("http://", "https://"))

    if is_url:
        resp = requests.get(path, stream=True, timeout=120)
        resp.raise_for_status()

        # Check gzip by header OR file extension
        http_is_gzip = (
            resp.headers.get("Content-Encoding") == "gzip"
            or path.endswith((".gz", ".gzip"))
        )

        if http_is_gzip:
            # Wrap raw response in a GzipFile for streaming decompression
            gz = gzip.GzipFile(fileobj=resp.raw)

            def line_stream():
                for line in gz:
                    yield line.decode("utf-8")

            try:
                yield line_stream()
            finally:
                gz.close()
                resp.close()

        else:
            def line_stream():
                for line in resp.iter_lines(chunk_size=chunk_size, decode_unicode=True):
                    yield line

            try:
                yield line_stream()
            finally:
                resp.close()

    else:
        # Local file path, gzip detected from the magic bytes
        with open(path, "rb") as probe:
            is_gzipped = probe.read(2) == GZIP_MAGIC

        if is_gzipped:
            f = gzip.open(path, "rt", encoding="utf-8")
        else:
            f = open(path, "r", encoding="utf-8")

        try:
            yield f
        finally:
            f.close()


def read_lines(sources: Iterable[str], stdin=None) -> list:
    """Read every source in order into one list of lines; stdin when there are none."""
    sources = list(sources)
    lines = []
    if not sources:
        print("Reading from stdin...", file=sys.stderr)
        stream = stdin if stdin is not None else sys.stdin
        lines.extend(line.rstrip("\r\n") for line in stream)
        return lines

    for source in sources:
        with open_stream(source) as stream:
            lines.extend(line.rstrip("\r\n") for line in stream)
    return lines


def parse_attributes(attr_str: str) -> dict:
    """Column 9 to {key: [values]}, repeated keys appended in file order."""
    attributes = {}
    if attr_str == ".":
        return attributes
    for pair in attr_str.split(";"):
        if not pair:
            continue
        parts = pair.split("=")
        if len(parts) != 2:
            raise MalformedAttributeError(pair, attr_str)
        key, value = parts
        attributes.setdefault(key, []).append(value)
    return attributes


def line_to_feature(line: str) -> Feature:
    cols = line.split("\t")
    if len(cols) != 9:
        raise MalformedFeatureLineError(
            f"Expected 9 tab separated columns, found {len(cols)} : {line!r}"
        )
    try:
        start = int(cols[3])
        end = int(cols[4])
    except ValueError:
        raise MalformedFeatureLineError(f"Bad coordinates {cols[3]!r}-{cols[4]!r} : {line!r}")

    return Feature(
        seq_id=cols[0],
        source=cols[1],
        feature_type=cols[2],
        start=start,
        end=end,
        score=cols[5],
        strand=cols[6],
        phase=cols[7],
        attributes=parse_attributes(cols[8]),
    )


START, IN_SCAFFOLD, IN_FASTA = range(3)


def parse_gff_lines(lines: Iterable[str]) -> GFF:
    """
    Build a GFF document from text lines.

    ##DNA <name> ... ##end-DNA blocks and a trailing ##FASTA section become scaffolds,
    other '#' lines and blank lines are skipped, everything else is a feature.
    """
    gff = GFF()
    state = START
    name: Optional[str] = None
    chunks = []

    def close_scaffold():
        if name is not None:
            gff.scaffolds.append(Scaffold(name, "".join(chunks)))

    for line in lines:
        line = line.rstrip("\r\n")

        if state == IN_SCAFFOLD:
            if line.startswith("##end-DNA"):
                close_scaffold()
                name, chunks, state = None, [], START
            else:
                chunks.append(line[2:])
            continue

        if state == IN_FASTA:
            if line.startswith(">"):
                close_scaffold()
                name, chunks = line[1:].rstrip(), []
            elif line.strip():
                chunks.append(line.rstrip())
            continue

        if line.startswith("##DNA "):
            name, chunks, state = line.split(" ", 1)[1], [], IN_SCAFFOLD
        elif line.startswith("##FASTA"):
            state = IN_FASTA
        elif line.startswith("#") or not line.strip():
            continue
        else:
            gff.features.append(line_to_feature(line))

    # unterminated DNA block or the last FASTA record
    close_scaffold()
    return gff


def to_chunks(seq: str, width: int = DNA_LINE_WIDTH) -> list:
    return [seq[i:i + width] for i in range(0, len(seq), width)]


def gff_output(gff: GFF, fasta: bool = False) -> list:
    """Render a GFF document as GFF3 lines, sequences inline or in a ##FASTA tail."""
    out = ["##gff-version 3"]
    if fasta:
        out.extend(f.to_line() for f in gff.features)
        if gff.scaffolds:
            out.append("##FASTA")
            for scaffold in gff.scaffolds:
                out.append(f">{scaffold.name}")
                out.extend(to_chunks(scaffold.dna))
        return out

    out.extend(f"##Type DNA {s.name}" for s in gff.scaffolds)
    for scaffold in gff.scaffolds:
        out.append(f"##DNA {scaffold.name}")
        out.extend("##" + chunk for chunk in to_chunks(scaffold.dna))
        out.append("##end-DNA")
    out.extend(f.to_line() for f in gff.features)
    return out


def group_by(items: Iterable, key) -> list:
    """
    Group items by key(item) in first-seen key order.
    Items whose key is None are left out of every group.
    """
    groups = {}
    for item in items:
        k = key(item)
        if k is None:
            continue
        groups.setdefault(k, []).append(item)
    return list(groups.values())


def format_int(x) -> str:
    """Thousands separators on the integer part, fractional part kept as is."""
    head, sep, tail = str(x).partition(".")
    sign = ""
    if head.startswith("-"):
        sign, head = "-", head[1:]
    digits = ",".join(head[max(i - 3, 0):i] for i in range(len(head), 0, -3)[::-1])
    return f"{sign}{digits}{sep}{tail}"

