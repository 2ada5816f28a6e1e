from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from inspectpdf import __version__
from inspectpdf.cli.main import cli


def test_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_report_command(fake_engine, record_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "report.pdf"

    result = CliRunner().invoke(
        cli,
        ["report", str(record_file), "-o", str(output), "--image-timeout", "100", "--page-format", "A4"],
    )

    assert result.exit_code == 0, result.output
    assert output.exists()
    assert "Generated 1 report(s)" in result.output
    assert fake_engine.evaluate_args == [100, 100]
    assert {call["format"] for call in fake_engine.pdf_calls} == {"A4"}


def test_report_command_default_output(fake_engine, record_file: Path) -> None:
    result = CliRunner().invoke(cli, ["report", str(record_file)])
    assert result.exit_code == 0, result.output
    assert record_file.with_suffix(".pdf").exists()


def test_report_command_headed(fake_engine, record_file: Path, tmp_path: Path) -> None:
    result = CliRunner().invoke(cli, ["report", str(record_file), "-o", str(tmp_path / "r.pdf"), "--headed"])
    assert result.exit_code == 0, result.output
    assert fake_engine.launch_kwargs["headless"] is False


def test_report_command_reports_failing_stage(fake_engine, record_file: Path, tmp_path: Path) -> None:
    fake_engine.fail_goto = ".cover."
    output = tmp_path / "report.pdf"

    result = CliRunner().invoke(cli, ["report", str(record_file), "-o", str(output)])

    assert result.exit_code == 1
    assert "render stage" in result.output
    assert "cover document" in result.output
    assert not output.exists()


def test_report_command_rejects_malformed_record(fake_engine, tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("[]", encoding="utf-8")

    result = CliRunner().invoke(cli, ["report", str(broken)])

    assert result.exit_code == 1
    assert "record stage" in result.output
    assert fake_engine.launches == 0


def test_merge_command(pdf_factory, tmp_path: Path) -> None:
    output = tmp_path / "merged.pdf"
    result = CliRunner().invoke(
        cli,
        ["merge", str(pdf_factory("a.pdf")), str(pdf_factory("b.pdf", 2)), str(output), "--title", "Merged"],
    )
    assert result.exit_code == 0, result.output
    assert output.exists()


def test_info_command(pdf_factory) -> None:
    result = CliRunner().invoke(cli, ["info", str(pdf_factory("sample.pdf", 3, title="Sample"))])
    assert result.exit_code == 0, result.output
    assert "Number of Pages" in result.output
    assert "Sample" in result.output


def test_info_command_rejects_invalid_pdf(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(b"not a pdf")
    result = CliRunner().invoke(cli, ["info", str(bogus)])
    assert result.exit_code == 1
    assert "Error" in result.output
