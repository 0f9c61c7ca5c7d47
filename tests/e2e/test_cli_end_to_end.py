"""
End-to-end tests through the command-line entry point.

Tests the complete flow: argv → validation → transform → stdout report,
persisted files and exit code
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from script_tester.cli.runner_cli import main


REPO_ROOT = Path(__file__).resolve().parents[2]


UPPERCASE_SCRIPT = """
    record = session.get()
    if record is not None:
        record = session.write(record, session.read(record).upper())
        session.transfer(record, REL_SUCCESS)
"""


@pytest.mark.e2e
def test_directory_run_persists_and_reports(write_script, input_dir, output_dir, capsys):
    script = write_script("upper.py", UPPERCASE_SCRIPT)

    exit_code = main([f"-input={input_dir}", f"-outputSuccess={output_dir}", str(script)])

    assert exit_code == 0
    assert capsys.readouterr().out == "Records transferred to success: 2\n\n"
    assert (output_dir / "x.txt").read_bytes() == b"HELLO"
    assert (output_dir / "y.txt").read_bytes() == b"WORLD"


@pytest.mark.e2e
def test_stdin_run_with_content(write_script, fake_stdin, capsys):
    script = write_script("upper.py", UPPERCASE_SCRIPT)
    fake_stdin(b"hello")

    exit_code = main(["-content", str(script)])

    assert exit_code == 0
    assert capsys.readouterr().out == "HELLO\n\nRecords transferred to success: 1\n\n"


@pytest.mark.e2e
def test_all_reports_attributes_for_both_outcomes(write_script, input_dir, capsys):
    script = write_script("route.py", """
        record = session.get()
        if record is not None:
            record = session.put_attribute(record, "checked", "yes")
            name = record.attributes["filename"]
            session.transfer(record, REL_SUCCESS if name == "x.txt" else REL_FAILURE)
    """)

    exit_code = main(["-all", f"-input={input_dir}", str(script)])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.count("Record Attribute Map Content") == 2
    assert "Key: 'checked'\n\tValue: 'yes'" in out
    assert out.index("Records transferred to success: 1") < out.index("world")
    assert out.endswith("Records transferred to failure: 1\n\n")


@pytest.mark.e2e
def test_no_success_suppresses_report(passthrough_script, input_dir, capsys):
    exit_code = main(["-no-success", f"-input={input_dir}", str(passthrough_script)])

    assert exit_code == 0
    assert capsys.readouterr().out == ""


@pytest.mark.e2e
def test_modules_option(write_script, fake_stdin, tmp_path, capsys):
    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "e2e_greeting.py").write_text("PREFIX = 'greeting: '\n")
    script = write_script("greet.py", """
        from e2e_greeting import PREFIX
        record = session.get()
        if record is not None:
            record = session.write(record, PREFIX + record.text())
            session.transfer(record, REL_SUCCESS)
    """)
    fake_stdin(b"hi")

    exit_code = main([f"-modules={lib}", "-content", str(script)])

    assert exit_code == 0
    assert capsys.readouterr().out.startswith("greeting: hi\n")


# =======================
# EXIT CODES
# =======================

@pytest.mark.e2e
def test_no_arguments_prints_usage(capsys):
    exit_code = main([])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert captured.out == ""
    assert "usage: script-tester" in captured.err


@pytest.mark.e2e
def test_missing_script_exit_code(tmp_path, capsys):
    assert main([str(tmp_path / "absent.py")]) == 2
    assert "Script file does not exist" in capsys.readouterr().err


@pytest.mark.e2e
def test_missing_input_directory_exit_code(passthrough_script, capsys):
    exit_code = main(["-input=/does/not/exist", str(passthrough_script)])

    captured = capsys.readouterr()
    assert exit_code == 3
    assert captured.out == ""
    assert "Input file directory does not exist: /does/not/exist" in captured.err


@pytest.mark.e2e
def test_output_path_not_a_directory_exit_code(passthrough_script, input_dir, tmp_path):
    target = tmp_path / "plain-file"
    target.write_text("")
    assert main([f"-input={input_dir}", f"-outputFailure={target}", str(passthrough_script)]) == 4


@pytest.mark.e2e
def test_missing_attribute_file_exit_code(passthrough_script, input_dir, tmp_path):
    assert main([f"-input={input_dir}", f"-attrfile={tmp_path / 'nope'}", str(passthrough_script)]) == 5


@pytest.mark.e2e
def test_script_that_does_not_compile_exit_code(write_script, input_dir):
    script = write_script("broken.py", "def broken(:\n")
    assert main([f"-input={input_dir}", str(script)]) == 6


@pytest.mark.e2e
def test_untransferred_record_exit_code(write_script, input_dir, output_dir, capsys):
    script = write_script("drop.py", """
        session.get()
    """)

    exit_code = main([f"-input={input_dir}", f"-outputSuccess={output_dir}", str(script)])

    assert exit_code == 7
    assert capsys.readouterr().out == ""
    assert list(output_dir.iterdir()) == []


@pytest.mark.e2e
def test_metrics_file_written(passthrough_script, input_dir, tmp_path, monkeypatch):
    metrics_file = tmp_path / "metrics.prom"
    monkeypatch.setenv("METRICS_FILE", str(metrics_file))

    assert main([f"-input={input_dir}", str(passthrough_script)]) == 0

    text = metrics_file.read_text()
    assert "script_tester_records_routed_total" in text
    assert "script_tester_runs_total" in text


@pytest.mark.e2e
def test_unreadable_input_file_exit_code(passthrough_script, input_dir, monkeypatch, metric_value, capsys):
    original = Path.read_bytes

    def read_bytes(path):
        if path.name == "y.txt":
            raise OSError(5, "Input/output error")
        return original(path)

    monkeypatch.setattr(Path, "read_bytes", read_bytes)
    failures_before = metric_value("script_tester_runs_total", status="failure")

    exit_code = main([f"-input={input_dir}", str(passthrough_script)])

    captured = capsys.readouterr()
    assert exit_code == 8
    assert captured.out == ""
    assert "Could not read input" in captured.err
    assert "Traceback" not in captured.err
    assert metric_value("script_tester_runs_total", status="failure") == failures_before + 1


@pytest.mark.e2e
@pytest.mark.skipif(sys.platform == "win32", reason="select() does not support pipes on Windows")
def test_open_silent_stdin_pipe_does_not_hang(passthrough_script):
    """The harness treats a pipe nobody writes to as an empty batch"""
    env = dict(os.environ, PYTHONPATH=os.pathsep.join(filter(None, [str(REPO_ROOT), os.environ.get("PYTHONPATH")])))
    process = subprocess.Popen(
        [sys.executable, "-m", "script_tester.cli.runner_cli", str(passthrough_script)],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=env,
    )
    try:
        exit_code = process.wait(timeout=30)
        stdout = process.stdout.read()
    finally:
        if process.poll() is None:
            process.kill()
        process.stdin.close()
        process.stdout.close()
        process.stderr.close()

    assert exit_code == 0
    assert stdout == b"Records transferred to success: 0\n\n"
