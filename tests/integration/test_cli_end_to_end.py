"""Drive the road-registry console as a subprocess with scripted stdin."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]

pytestmark = pytest.mark.slow


def _run(tmp_path: Path, script: list[str], *extra: str) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(PROJECT_ROOT / "src"), env.get("PYTHONPATH")])
    )
    return subprocess.run(
        [sys.executable, "-m", "road_registry", "--data-dir", str(tmp_path / "data"), *extra],
        input="\n".join(script) + "\n",
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )


def test_session_persists_tables(tmp_path: Path):
    proc = _run(
        tmp_path,
        [
            "1", "3", "Kigali", "Huye", "Musanze",
            "2", "Kigali", "Huye",
            "2", "Musanze", "Kigali",
            "3", "Huye", "Kigali", "250",
            "9",
        ],
    )

    assert "Welcome to Rwanda Infrastructure Management System" in proc.stdout
    assert "3 cities added successfully." in proc.stdout
    assert "Exiting..." in proc.stdout
    assert proc.stderr == ""

    data_dir = tmp_path / "data"
    assert (data_dir / "cities.txt").read_text(encoding="utf-8") == (
        "Index\tCity Name\n1\tKigali\n2\tHuye\n3\tMusanze\n"
    )
    assert (data_dir / "roads.txt").read_text(encoding="utf-8") == (
        "Nbr\tRoad\t\t\tBudget\n1\tKigali - Huye\t250.0\n2\tKigali - Musanze\t0.0\n"
    )


def test_second_session_reloads_and_keeps_ids(tmp_path: Path):
    _run(tmp_path, ["1", "2", "Kigali", "Huye", "2", "Huye", "Kigali", "9"])

    proc = _run(tmp_path, ["4", "2", "Huye Town", "8", "9"])

    assert "City edited successfully." in proc.stdout
    assert "2: Huye Town" in proc.stdout
    roads = (tmp_path / "data" / "roads.txt").read_text(encoding="utf-8")
    assert roads.splitlines()[1] == "1\tKigali - Huye Town\t0.0"


def test_verbose_logging_goes_to_stderr(tmp_path: Path):
    proc = _run(tmp_path, ["1", "1", "Kigali", "9"], "-v")

    assert "road_registry.io: Saved 1 cities" in proc.stderr
    assert "road_registry" not in proc.stdout


def test_end_of_input_exits_cleanly(tmp_path: Path):
    proc = _run(tmp_path, ["6"])
    assert "No cities recorded." in proc.stdout
    assert proc.stdout.rstrip().endswith("Exiting...")


def test_invalid_max_cities_is_rejected(tmp_path: Path):
    env = dict(os.environ)
    env["PYTHONPATH"] = str(PROJECT_ROOT / "src")
    proc = subprocess.run(
        [sys.executable, "-m", "road_registry", "--max-cities", "0"],
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
    )
    assert proc.returncode != 0
    assert "max_cities must be a positive integer" in proc.stderr
