import os
import subprocess
import sys
from pathlib import Path

CLI = [sys.executable, "-m", "tarballer"]


def _env(**extra: str) -> dict[str, str]:
    env = os.environ.copy()
    env.pop("TARBALLER_LOG_DIR", None)
    env.pop("TARBALLER_CONFIG", None)
    env["COLUMNS"] = "200"
    env.update(extra)
    return env


def test_verbose_output_lists_folders(target: Path) -> None:
    result = subprocess.run(
        CLI + ["-v", "--dry-run", str(target)],
        capture_output=True,
        text=True,
        check=True,
        env=_env(),
    )
    combined = result.stdout + result.stderr
    assert "Dry run - would tarball folder" in combined
    assert "Found 2 folder(s)" in combined


def test_json_log_written_when_requested(target: Path, tmp_path: Path) -> None:
    log_dir = tmp_path / "logs"

    subprocess.run(
        CLI + [str(target)],
        capture_output=True,
        text=True,
        check=True,
        env=_env(TARBALLER_LOG_DIR=str(log_dir)),
    )

    log_file = log_dir / "tarballer.log"
    assert log_file.exists()
    assert "Tarball created" in log_file.read_text()


def test_no_log_file_by_default(target: Path, snapshot) -> None:
    before = snapshot(target)

    subprocess.run(
        CLI + ["--dry-run", str(target)],
        capture_output=True,
        text=True,
        check=True,
        cwd=target,
        env=_env(),
    )

    assert snapshot(target) == before


def test_save_logfile_mirror(target: Path, tmp_path: Path) -> None:
    mirror = tmp_path / "run.log"

    subprocess.run(
        CLI + ["-v", "--save-logfile", str(mirror), str(target)],
        capture_output=True,
        text=True,
        check=True,
        env=_env(),
    )

    text = mirror.read_text()
    assert "[INFO] Removed folder" not in text
    assert "[INFO] Tarball created" in text
