"""Tests for gffinfo CLI."""

import json
import subprocess
import sys

from gffinfo import parse_gff_lines


def run_cli(*args, stdin=None):
    return subprocess.run(
        [sys.executable, "-m", "gffinfo.cli", *map(str, args)],
        capture_output=True,
        text=True,
        input=stdin,
    )


class TestCLI:
    """Test cases for the gffinfo command-line interface."""

    def test_cli_help(self):
        """Test that CLI shows help message."""
        result = run_cli("--help")

        assert result.returncode == 0
        assert "Summarise, check and rewrite GFF3" in result.stdout

    def test_stats(self, sample_file):
        """Test the text statistics report."""
        result = run_cli("stats", sample_file)

        assert result.returncode == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "Num Genes = 2"
        assert "CDS : " in lines

    def test_stats_json(self, sample_file):
        """Test JSON statistics output."""
        result = run_cli("stats", "--json", "--pretty", sample_file)

        assert result.returncode == 0
        stats = json.loads(result.stdout)
        assert stats["genes"]["count"] == 2
        assert "\n  " in result.stdout

    def test_stats_from_stdin(self, sample_file):
        """Test stdin is read when no files are given."""
        result = run_cli("stats", stdin=sample_file.read_text())

        assert result.returncode == 0
        assert "Reading from stdin..." in result.stderr
        assert result.stdout.startswith("Num Genes = 2\n")

    def test_overlapping_cds(self, sample_file):
        result = run_cli("overlapping-cds", sample_file)

        assert result.returncode == 0
        assert result.stdout.splitlines() == ["chr1", "False", "chr2", "False"]

    def test_process_update_ids_to_file(self, sample_file, tmp_path):
        """Test renumbered output written to a file is announced on stdout."""
        out = tmp_path / "out.gff3"
        result = run_cli(
            "process", "--update-ids", "--feature-prefix", "G_", sample_file, "-o", out
        )

        assert result.returncode == 0
        assert result.stdout == f"Writing to file : {out}\n"
        gff = parse_gff_lines(out.read_text().splitlines())
        assert gff.features[0].id == "G_000010"
        assert len(gff.scaffolds) == 2

    def test_process_remove_contig_fasta(self, sample_file):
        """Test contig removal with the ##FASTA sequence layout."""
        result = run_cli("process", "--remove-contig", "chr1", "--fasta", sample_file)

        assert result.returncode == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "##gff-version 3"
        assert "##FASTA" in lines
        assert ">chr2" in lines
        assert ">chr1" not in lines
        assert all(not line.startswith("chr1\t") for line in lines)

    def test_unresolved_parent_exits_nonzero(self, tmp_path):
        path = tmp_path / "bad.gff3"
        path.write_text("chr1\tsrc\tCDS\t1\t10\t.\t+\t0\tID=c1;Parent=nope\n")

        result = run_cli("process", "--update-ids", path)

        assert result.returncode != 0
        assert "Error:" in result.stderr
        assert "nope" in result.stderr

    def test_malformed_attribute_exits_nonzero(self, tmp_path):
        path = tmp_path / "bad.gff3"
        path.write_text("chr1\tsrc\tCDS\t1\t10\t.\t+\t0\tID=c1;broken\n")

        result = run_cli("stats", path)

        assert result.returncode != 0
        assert "Bad attribute pair" in result.stderr

    def test_invalid_utf8_exits_nonzero(self, tmp_path):
        """Test undecodable input is reported as an error, not a traceback."""
        path = tmp_path / "bad.gff3"
        path.write_bytes(b"chr1\tsrc\tCDS\t1\t10\t.\t+\t0\tID=c1;Note=\xff\xfe\n")

        result = run_cli("overlapping-cds", path)

        assert result.returncode == 1
        assert result.stderr.startswith("Error:")
        assert "Traceback" not in result.stderr

    def test_stats_json_to_file(self, sample_file, tmp_path):
        """Test JSON written to a file is announced like every other output file."""
        out = tmp_path / "stats.json"
        result = run_cli("stats", "--json", sample_file, "-o", out)

        assert result.returncode == 0
        assert result.stdout == f"Writing to file : {out}\n"
        assert json.loads(out.read_text())["scaffold_count"] == 2

    def test_cli_invalid_file(self):
        """Test CLI error handling for invalid files."""
        result = run_cli("stats", "/nonexistent/file.gff3")

        assert result.returncode != 0
        assert "Error:" in result.stderr
