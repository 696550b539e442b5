"""
Tests for the yucon command line: one-shot, batch and interactive modes,
option validation, settings and exit codes.
"""

import io

import pytest

from yucon import PROGRAM_TITLE
from yucon.interpreter import build_parser, main
from yucon.interpreter.cli import EXIT_CONVERSION_ERROR, EXIT_FILE_ERROR, EXIT_OK, EXIT_STARTUP, HINT

SPANS = "names=span\ntype=length\nfactor=228.6\noffset=0\n\nnames=cubit\ntype=length\nfactor=457.2\noffset=0\n"


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at an empty file so a user's real config never leaks in."""
    config = tmp_path / "config.yaml"
    config.write_text("{}\n", encoding="utf-8")
    monkeypatch.setenv("YUCON_CONFIG", str(config))
    monkeypatch.delenv("YUCON_UNITS", raising=False)
    return config


def feed_input(monkeypatch, lines):
    """Replace input() with one that returns ``lines`` and then raises EOFError."""
    pending = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(pending)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


# ── One-shot ───────────────────────────────────────────────────────────────────


class TestOneShot:
    def test_simple(self, capsys):
        assert main(["1", "in", "mm"]) == EXIT_OK
        assert capsys.readouterr().out == "25.4\n"

    def test_descriptive(self, capsys):
        assert main(["-d", "1", "in", "mm"]) == EXIT_OK
        assert capsys.readouterr().out == "25.4 mm\n"

    def test_verbose(self, capsys):
        assert main(["-v", "-p", "6", "100", "C", "K"]) == EXIT_OK
        assert capsys.readouterr().out == "100 C = 373.15 K\n"

    def test_negative_value(self, capsys):
        assert main(["-v", "-p", "6", "-40", "C", "F"]) == EXIT_OK
        assert capsys.readouterr().out == "-40 C = -40 F\n"

    def test_default_output_reads_back_exactly(self, capsys):
        assert main(["1", "mi", "m"]) == EXIT_OK
        out = capsys.readouterr().out
        assert out == "1609.344\n"
        assert float(out) == 1609.344

    def test_options_after_negative_value(self, capsys):
        assert main(["-40", "C", "F", "-d", "-p", "6"]) == EXIT_OK
        assert capsys.readouterr().out == "-40 F\n"

    def test_negative_exponent_value(self, capsys):
        assert main(["-1e3", "C", "F", "-d", "-p", "6"]) == EXIT_OK
        assert capsys.readouterr().out == "-1768 F\n"

    def test_negative_exponent_value_verbose(self, capsys):
        assert main(["-v", "-p", "6", "-2.5E-1", "m", "mm"]) == EXIT_OK
        assert capsys.readouterr().out == "-0.25 m = -250 mm\n"

    def test_precision_option(self, capsys):
        assert main(["-p", "3", "1", "kg", "lb"]) == EXIT_OK
        assert capsys.readouterr().out == "2.2\n"

    def test_conversion_error(self, capsys):
        assert main(["1", "m", "kg"]) == EXIT_CONVERSION_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: incompatible unit types" in captured.err
        assert HINT in captured.err

    def test_recall_has_nothing_to_recall(self, capsys):
        assert main(["1", ":", "mm"]) == EXIT_CONVERSION_ERROR
        assert "unable to recall last input unit" in capsys.readouterr().err

    def test_output_file(self, tmp_path, capsys):
        out = tmp_path / "out.txt"
        assert main(["-o", str(out), "1", "in", "mm"]) == EXIT_OK
        assert capsys.readouterr().out == "25.4\n"
        assert out.read_text(encoding="utf-8") == "25.4\n"

    def test_quiet_output_file(self, tmp_path, capsys):
        out = tmp_path / "out.txt"
        assert main(["-q", "-o", str(out), "1", "in", "mm"]) == EXIT_OK
        assert capsys.readouterr().out == ""
        assert out.read_text(encoding="utf-8") == "25.4\n"

    def test_unwritable_output_file(self, tmp_path, capsys):
        assert main(["-o", str(tmp_path / "missing" / "out.txt"), "1", "in", "mm"]) == EXIT_FILE_ERROR
        assert "unable to write output file" in capsys.readouterr().err


# ── Batch ──────────────────────────────────────────────────────────────────────


class TestBatch:
    def test_file(self, tmp_path, capsys):
        src = tmp_path / "input.txt"
        src.write_text("1 in mm\n# comment\n\n100 C K\n", encoding="utf-8")
        assert main(["-b", "-d", "-p", "6", str(src)]) == EXIT_OK
        assert capsys.readouterr().out == "25.4 mm\n373.15 K\n"

    def test_recall_between_lines(self, tmp_path, capsys):
        src = tmp_path / "input.txt"
        src.write_text("1 in mm\n2 : :\n", encoding="utf-8")
        assert main(["-b", str(src)]) == EXIT_OK
        assert capsys.readouterr().out == "25.4\n50.8\n"

    def test_bad_line_reported_and_batch_continues(self, tmp_path, capsys):
        src = tmp_path / "input.txt"
        src.write_text("1 m kg\n1 in mm\n", encoding="utf-8")
        assert main(["-b", str(src)]) == EXIT_CONVERSION_ERROR
        captured = capsys.readouterr()
        assert captured.out == "25.4\n"
        assert "Error: line 1: incompatible unit types" in captured.err

    def test_malformed_line_skipped(self, tmp_path, capsys):
        src = tmp_path / "input.txt"
        src.write_text("just words\n1 in mm\n", encoding="utf-8")
        assert main(["-b", str(src)]) == EXIT_OK
        assert capsys.readouterr().out == "25.4\n"

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("1 in mm\n2 in mm\n"))
        assert main(["-b"]) == EXIT_OK
        assert capsys.readouterr().out == "25.4\n50.8\n"

    def test_quiet_to_file(self, tmp_path, capsys):
        src = tmp_path / "input.txt"
        out = tmp_path / "output.txt"
        src.write_text("1 in mm\n", encoding="utf-8")
        assert main(["-b", "-q", "-o", str(out), str(src)]) == EXIT_OK
        assert capsys.readouterr().out == ""
        assert out.read_text(encoding="utf-8") == "25.4\n"

    def test_missing_input_file(self, tmp_path, capsys):
        assert main(["-b", str(tmp_path / "nope.txt")]) == EXIT_FILE_ERROR
        assert "unable to open input file" in capsys.readouterr().err


# ── Interactive ────────────────────────────────────────────────────────────────


class TestInteractive:
    def test_session(self, monkeypatch, capsys):
        feed_input(monkeypatch, ["1 in mm", "format v", ": : :", "exit", "1 in mm"])
        assert main([]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.startswith(PROGRAM_TITLE)
        assert "25.4\n" in out
        assert "Okay.\n" in out
        assert "1 inch = 25.4 millimeter\n" in out
        assert out.count("25.4") == 2

    def test_errors_do_not_end_session(self, monkeypatch, capsys):
        feed_input(monkeypatch, ["1 m kg", "1 in mm"])
        assert main([]) == EXIT_OK
        captured = capsys.readouterr()
        assert "Error: incompatible unit types" in captured.err
        assert "25.4\n" in captured.out

    def test_end_of_input_exits(self, monkeypatch):
        feed_input(monkeypatch, [])
        assert main([]) == EXIT_OK


# ── Options and settings ───────────────────────────────────────────────────────


class TestUsageErrors:
    @pytest.mark.parametrize(
        "argv",
        [
            ["1", "in"],
            ["1", "in", "mm", "cm"],
            ["-q", "1", "in", "mm"],
            ["-o", "out.txt"],
            ["-b", "a.txt", "b.txt"],
            ["-s", "-d", "1", "in", "mm"],
            ["-p", "0", "1", "in", "mm"],
        ],
    )
    def test_exit_code_two(self, argv, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
        assert excinfo.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert PROGRAM_TITLE in capsys.readouterr().out

    def test_help_mentions_escape_syntax(self):
        assert "_<prefix><unit>" in build_parser().format_help()


class TestSettingsAndUnits:
    def test_units_file_option(self, tmp_path, capsys):
        units = tmp_path / "units.cfg"
        units.write_text(SPANS, encoding="utf-8")
        assert main(["--units", str(units), "2", "span", "cubit"]) == EXIT_OK
        assert capsys.readouterr().out == "1\n"

    def test_units_env(self, tmp_path, monkeypatch, capsys):
        units = tmp_path / "units.cfg"
        units.write_text(SPANS, encoding="utf-8")
        monkeypatch.setenv("YUCON_UNITS", str(units))
        assert main(["1", "cubit", "span"]) == EXIT_OK
        assert capsys.readouterr().out == "2\n"

    def test_missing_units_file(self, tmp_path, capsys):
        assert main(["--units", str(tmp_path / "nope.cfg"), "1", "in", "mm"]) == EXIT_STARTUP
        assert "units file missing or unreadable" in capsys.readouterr().err

    def test_units_file_not_utf8(self, tmp_path, capsys):
        units = tmp_path / "units.cfg"
        units.write_bytes(b"# caf\xe9\n" + SPANS.encode("utf-8"))
        assert main(["--units", str(units), "1", "span", "span"]) == EXIT_STARTUP
        assert "not valid UTF-8" in capsys.readouterr().err

    def test_config_not_utf8(self, tmp_path, capsys):
        config = tmp_path / "bad.yaml"
        config.write_bytes(b"# caf\xe9\nprecision: 3\n")
        assert main(["--config", str(config), "1", "in", "mm"]) == EXIT_STARTUP
        assert "not valid UTF-8" in capsys.readouterr().err

    def test_config_file(self, tmp_path, capsys):
        config = tmp_path / "custom.yaml"
        config.write_text("output_format: descriptive\nprecision: 3\n", encoding="utf-8")
        assert main(["--config", str(config), "1", "kg", "lb"]) == EXIT_OK
        assert capsys.readouterr().out == "2.2 lb\n"

    def test_options_override_config(self, tmp_path, capsys):
        config = tmp_path / "custom.yaml"
        config.write_text("output_format: descriptive\nprecision: 3\n", encoding="utf-8")
        assert main(["--config", str(config), "-v", "-p", "6", "1", "kg", "lb"]) == EXIT_OK
        assert capsys.readouterr().out == "1 kg = 2.20462 lb\n"

    def test_invalid_config(self, tmp_path, capsys):
        config = tmp_path / "bad.yaml"
        config.write_text("precision: lots\n", encoding="utf-8")
        assert main(["--config", str(config), "1", "in", "mm"]) == EXIT_STARTUP
        assert "precision" in capsys.readouterr().err

    def test_unknown_log_level(self, capsys):
        assert main(["--log-level", "CHATTY", "1", "in", "mm"]) == EXIT_STARTUP
        assert "unknown log level" in capsys.readouterr().err
