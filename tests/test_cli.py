"""Tests for the mlevels command line interface.

Copyright © 2024 The mlevels authors.
"""

from click.testing import CliRunner

from mlevels import __version__, cli
from mlevels.report.models import MethylationLevelsReport


def test_version():
    runner = CliRunner()
    result = runner.invoke(cli.main_cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_levels_runs_ok(counts_file, tmp_path):
    runner = CliRunner()
    output = tmp_path / "sample.levels.yaml"

    args = ["levels", "--counts", str(counts_file), "--output", str(output)]
    result = runner.invoke(cli.main_cli, args)

    assert result.exit_code == 0, result.output
    report = MethylationLevelsReport.from_yaml(output)
    assert report.cytosine.total_sites == 9
    assert report.cpg_symmetric.sites_covered == 1
    assert output.read_text().startswith("cytosine:\n  total_sites: 9\n")


def test_levels_verbose(counts_file, tmp_path):
    runner = CliRunner()
    output = tmp_path / "sample.levels.yaml"
    log_file = tmp_path / "mlevels.log"

    args = [
        "--verbose",
        "--log-file",
        str(log_file),
        "levels",
        "-c",
        str(counts_file),
        "-o",
        str(output),
    ]
    result = runner.invoke(cli.main_cli, args)

    assert result.exit_code == 0, result.output
    content = log_file.read_text()
    assert "PROCESSING:\tchr1" in content
    assert "PROCESSING:\tchr2" in content
    assert "Finished mlevels levels" in content


def test_levels_json_with_alpha(write_counts, tmp_path):
    counts = write_counts(["chr1\t12\t+\tCHH\t0.8\t10"])
    runner = CliRunner()

    default_output = tmp_path / "default.json"
    result = runner.invoke(
        cli.main_cli,
        ["levels", "-c", str(counts), "-o", str(default_output), "--format", "json"],
    )
    assert result.exit_code == 0, result.output
    assert MethylationLevelsReport.from_json(default_output).chh.called_meth == 0

    lenient_output = tmp_path / "lenient.json"
    result = runner.invoke(
        cli.main_cli,
        [
            "levels",
            "-c",
            str(counts),
            "-o",
            str(lenient_output),
            "--format",
            "json",
            "--alpha",
            "0.1",
        ],
    )
    assert result.exit_code == 0, result.output
    assert MethylationLevelsReport.from_json(lenient_output).chh.called_meth == 1


def test_levels_with_config_file(write_counts, tmp_path):
    counts = write_counts(["chr1\t12\t+\tCHH\t0.8\t10"])
    config = tmp_path / "settings.yaml"
    config.write_text("call_threshold: 0.3\n")
    output = tmp_path / "report.yaml"

    runner = CliRunner()
    result = runner.invoke(
        cli.main_cli,
        ["levels", "-c", str(counts), "-o", str(output), "--config", str(config)],
    )

    assert result.exit_code == 0, result.output
    assert MethylationLevelsReport.from_yaml(output).chh.called_meth == 1


def test_levels_invalid_alpha(counts_file, tmp_path):
    runner = CliRunner()
    output = tmp_path / "report.yaml"
    result = runner.invoke(
        cli.main_cli,
        ["levels", "-c", str(counts_file), "-o", str(output), "--alpha", "1.5"],
    )

    assert result.exit_code != 0
    assert not output.exists()


def test_levels_invalid_config(counts_file, tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text("alpha: 3\n")
    output = tmp_path / "report.yaml"

    runner = CliRunner()
    result = runner.invoke(
        cli.main_cli,
        ["levels", "-c", str(counts_file), "-o", str(output), "--config", str(config)],
    )

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert not output.exists()


def test_levels_missing_input(tmp_path):
    runner = CliRunner()
    output = tmp_path / "report.yaml"
    result = runner.invoke(
        cli.main_cli,
        ["levels", "-c", str(tmp_path / "missing.counts"), "-o", str(output)],
    )

    assert result.exit_code == 1
    assert "missing.counts" in result.output
    assert not output.exists()


def test_levels_unwritable_output(counts_file, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    output = blocker / "report.yaml"

    runner = CliRunner()
    result = runner.invoke(
        cli.main_cli, ["levels", "-c", str(counts_file), "-o", str(output)]
    )

    assert result.exit_code == 1
    assert not output.exists()


def test_levels_malformed_line(write_counts, tmp_path):
    valid = ["chr1\t12\t+\tCHH\t0.8\t10"] * 50
    counts = write_counts(valid + ["chr1\t13\t+\tCHH\tabc\t10"] + valid)
    output = tmp_path / "report.yaml"

    runner = CliRunner()
    result = runner.invoke(cli.main_cli, ["levels", "-c", str(counts), "-o", str(output)])

    assert result.exit_code == 1
    assert "failed parsing site: chr1\t13\t+\tCHH\tabc\t10" in result.output
    assert not output.exists()


def test_levels_bad_site_type(write_counts, tmp_path):
    counts = write_counts(["chr1\t12\t+\tCHH\t0.8\t10", "chr1\t13\t+\tCNN\t0.8\t10"])
    output = tmp_path / "report.yaml"

    runner = CliRunner()
    result = runner.invoke(cli.main_cli, ["levels", "-c", str(counts), "-o", str(output)])

    assert result.exit_code == 1
    assert "bad site type: chr1\t13\t+\tCNN\t0.8\t10" in result.output
    assert not output.exists()


def test_levels_error_reported_once(write_counts, tmp_path):
    counts = write_counts(["chr1\t13\t+\tCHH\tabc\t10"])
    output = tmp_path / "report.yaml"

    runner = CliRunner()
    result = runner.invoke(cli.main_cli, ["levels", "-c", str(counts), "-o", str(output)])

    assert result.exit_code == 1
    assert result.output.count("failed parsing site") == 1
    assert "failed parsing site: chr1\t13\t+\tCHH\tabc\t10 (" in result.output


def test_levels_blank_line(write_counts, tmp_path):
    counts = write_counts(["chr1\t12\t+\tCHH\t0.8\t10", "", "chr1\t13\t+\tCHH\t0.8\t10"])
    output = tmp_path / "report.yaml"

    runner = CliRunner()
    result = runner.invoke(cli.main_cli, ["levels", "-c", str(counts), "-o", str(output)])

    assert result.exit_code == 1
    assert "failed parsing site" in result.output
    assert not output.exists()


def test_levels_undecodable_input(tmp_path):
    counts = tmp_path / "binary.counts"
    counts.write_bytes(b"\xff\xfe\x00chr1\t12\n")
    output = tmp_path / "report.yaml"

    runner = CliRunner()
    result = runner.invoke(cli.main_cli, ["levels", "-c", str(counts), "-o", str(output)])

    assert result.exit_code == 1
    assert "cannot decode" in result.output
    assert "CRITICAL" not in result.output
    assert "Traceback" not in result.output
    assert not output.exists()
