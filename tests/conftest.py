"""Small annotated GFF shared by the test modules."""

import pytest

from gffinfo import parse_gff_lines

FEATURE_ROWS = [
    ["chr1", "test", "gene", "1", "12", ".", "+", ".", "ID=gene1;Name=alpha"],
    ["chr1", "test", "mRNA", "1", "12", ".", "+", ".", "ID=mrna1;Parent=gene1"],
    ["chr1", "test", "CDS", "1", "4", ".", "+", "0", "ID=cds1;Parent=mrna1"],
    ["chr1", "test", "CDS", "7", "12", ".", "+", "0", "ID=cds1;Parent=mrna1"],
    ["chr2", "test", "gene", "2", "9", ".", "-", ".", "ID=gene2"],
    ["chr2", "test", "CDS", "2", "9", ".", "-", "0", "ID=cds2;Parent=gene2"],
]

FEATURE_LINES = ["\t".join(row) for row in FEATURE_ROWS]

CHR1 = "ACGTACGTACGGCCNNAATT"
CHR2 = "AAAACCCCGG"

SAMPLE_LINES = [
    "##gff-version 3",
    "##DNA chr1",
    "##ACGTACGTAC",
    "##GGCCNNAATT",
    "##end-DNA",
    "##DNA chr2",
    "##AAAACCCCGG",
    "##end-DNA",
] + FEATURE_LINES

SAMPLE_TEXT = "".join(line + "\n" for line in SAMPLE_LINES)


@pytest.fixture
def sample_lines():
    return list(SAMPLE_LINES)


@pytest.fixture
def sample_gff():
    return parse_gff_lines(SAMPLE_LINES)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.gff3"
    path.write_text(SAMPLE_TEXT)
    return path
