from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script via subprocess and validates exit codes,
stream output (stdout/stderr) and the resulting file contents.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "treerewriter" / "main.py"


def run_cli(
        args: List[str],
        cwd: Optional[Path] = None,
        home: Optional[Path] = None,
) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process.

    Injects 'src' into PYTHONPATH and points HOME at a scratch directory so
    a user's saved configuration never leaks into the test.

    Args:
        args: Command line arguments (excluding 'python' and script path).
        cwd: Working directory for the subprocess.
        home: Replacement home directory.

    Returns:
        subprocess.CompletedProcess: returncode, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    if home is not None:
        env["HOME"] = str(home)
        env["LOCALAPPDATA"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


def test_cli_reference_run(sample_tree: Path, home_dir: Path) -> None:
    """TC-01: With no arguments, only ./examples/a.txt is rewritten and announced."""
    result = run_cli([], cwd=sample_tree, home=home_dir)

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"
    assert result.stdout == os.path.join(".", "examples", "a.txt") + "\n"

    assert (sample_tree / "examples" / "a.txt").read_text(encoding="utf-8") == "toad toad"
    assert (sample_tree / "target" / "b.txt").read_text(encoding="utf-8") == "kwap"
    assert (sample_tree / "other" / "c.txt").read_text(encoding="utf-8") == "nothing"


def test_cli_logs_go_to_stderr(sample_tree: Path, home_dir: Path) -> None:
    result = run_cli(["--debug"], cwd=sample_tree, home=home_dir)

    assert result.returncode == 0
    assert "INFO | Run complete" in result.stderr
    assert "DEBUG |" in result.stderr
    assert "Run complete" not in result.stdout


def test_cli_empty_tree_prints_nothing(tmp_path: Path, home_dir: Path) -> None:
    """TC-02: An empty tree yields no stdout at all."""
    empty = tmp_path / "empty"
    empty.mkdir()

    result = run_cli(["-r", str(empty)], home=home_dir)

    assert result.returncode == 0
    assert result.stdout == ""


def test_cli_missing_root_exit_code(tmp_path: Path, home_dir: Path) -> None:
    """TC-03: A missing root is a usage error (exit code 2)."""
    result = run_cli(["-r", str(tmp_path / "non_existent_folder")], home=home_dir)

    assert result.returncode == 2
    assert "does not exist" in result.stderr
    assert result.stdout == ""


def test_cli_empty_search_is_rejected(sample_tree: Path, home_dir: Path) -> None:
    result = run_cli(["--search", ""], cwd=sample_tree, home=home_dir)

    assert result.returncode == 2
    assert "search_literal" in result.stderr
    assert (sample_tree / "examples" / "a.txt").read_text(encoding="utf-8") == "kwap kwap"


def test_cli_custom_literals_and_markers(tmp_path: Path, home_dir: Path) -> None:
    """TC-04: Flags override every default parameter."""
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    (root / "vendor").mkdir()
    (root / "src" / "lib.py").write_text("import oldname\noldname.run()\n", encoding="utf-8")
    (root / "vendor" / "src_copy.py").write_text("import oldname\n", encoding="utf-8")

    result = run_cli([
        "-r", str(root),
        "--include", "src",
        "--exclude", "vendor",
        "--search", "oldname",
        "--replace", "newname",
        "--traversal", "breadth",
        "--no-atomic",
    ], home=home_dir)

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == [os.path.join(str(root), "src", "lib.py")]
    assert (root / "src" / "lib.py").read_text(encoding="utf-8") == "import newname\nnewname.run()\n"
    assert (root / "vendor" / "src_copy.py").read_text(encoding="utf-8") == "import oldname\n"


def test_cli_config_file(sample_tree: Path, tmp_path: Path, home_dir: Path) -> None:
    """TC-05: Values from --config apply, and flags still win over them."""
    cfg = tmp_path / "rewrite.json"
    cfg.write_text(json.dumps({"replace_literal": "frog", "include_substring": "other"}),
                   encoding="utf-8")
    (sample_tree / "other" / "c.txt").write_text("kwap", encoding="utf-8")

    result = run_cli(["--config", str(cfg), "--replace", "newt"], cwd=sample_tree, home=home_dir)

    assert result.returncode == 0, result.stderr
    assert result.stdout == os.path.join(".", "other", "c.txt") + "\n"
    assert (sample_tree / "other" / "c.txt").read_text(encoding="utf-8") == "newt"
    assert (sample_tree / "examples" / "a.txt").read_text(encoding="utf-8") == "kwap kwap"


def test_cli_dump_config(home_dir: Path) -> None:
    result = run_cli(["--use-defaults", "--dump-config", "--search", "abc"], home=home_dir)

    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["search_literal"] == "abc"
    assert data["replace_literal"] == "toad"
    assert data["atomic_write"] is True


def test_cli_aborts_on_undecodable_file(tmp_path: Path, home_dir: Path) -> None:
    """TC-06: A decoding failure aborts with exit code 1 and a diagnostic."""
    root = tmp_path / "examples"
    root.mkdir()
    blob = root / "blob.bin"
    blob.write_bytes(b"\xff\xfekwap")

    result = run_cli(["-r", str(root)], home=home_dir)

    assert result.returncode == 1
    assert result.stdout == str(blob) + "\n"
    assert "ERROR: Rewrite aborted" in result.stderr
    assert blob.read_bytes() == b"\xff\xfekwap"


def test_cli_log_file(sample_tree: Path, tmp_path: Path, home_dir: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"

    result = run_cli(["--log-file", str(log_file)], cwd=sample_tree, home=home_dir)

    assert result.returncode == 0
    assert "Run complete" in log_file.read_text(encoding="utf-8")


def test_cli_missing_config_file_is_usage_error(sample_tree: Path, tmp_path: Path,
                                                home_dir: Path) -> None:
    missing = tmp_path / "nope.json"

    result = run_cli(["--config", str(missing)], cwd=sample_tree, home=home_dir)

    assert result.returncode == 2
    assert result.stdout == ""
    assert "Cannot load config file" in result.stderr
    assert (sample_tree / "examples" / "a.txt").read_text(encoding="utf-8") == "kwap kwap"


def test_cli_corrupt_config_file_is_usage_error(sample_tree: Path, tmp_path: Path,
                                                home_dir: Path) -> None:
    cfg = tmp_path / "broken.json"
    cfg.write_text("{not json", encoding="utf-8")

    result = run_cli(["--config", str(cfg)], cwd=sample_tree, home=home_dir)

    assert result.returncode == 2
    assert result.stdout == ""
    assert "Cannot load config file" in result.stderr
    assert (sample_tree / "examples" / "a.txt").read_text(encoding="utf-8") == "kwap kwap"


def test_cli_save_config_writes_file_without_running(sample_tree: Path, tmp_path: Path,
                                                     home_dir: Path) -> None:
    cfg = tmp_path / "saved" / "config.json"

    result = run_cli(["--save-config", "--config", str(cfg), "--search", "abc"],
                     cwd=sample_tree, home=home_dir)

    assert result.returncode == 0, result.stderr
    assert result.stdout == ""
    data = json.loads(cfg.read_text(encoding="utf-8"))
    assert data["search_literal"] == "abc"
    assert data["version"] == "1.0.0"
    assert (sample_tree / "examples" / "a.txt").read_text(encoding="utf-8") == "kwap kwap"


def test_cli_save_config_defaults_to_user_data_dir(home_dir: Path) -> None:
    result = run_cli(["--use-defaults", "--save-config", "--replace", "frog"], home=home_dir)

    assert result.returncode == 0, result.stderr
    app_dir = "TreeRewriter" if os.name == "nt" else ".treerewriter"
    saved = home_dir / app_dir / "config.json"
    assert json.loads(saved.read_text(encoding="utf-8"))["replace_literal"] == "frog"
