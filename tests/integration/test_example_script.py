import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _run_example(data_dir: Path) -> subprocess.CompletedProcess:
    script = PROJECT_ROOT / "examples" / "sample_network_example.py"
    return subprocess.run(
        [sys.executable, str(script), "--data-dir", str(data_dir)],
        capture_output=True,
        text=True,
        check=True,
    )


def test_example_script_records_network(tmp_path: Path):
    data_dir = tmp_path / "data"
    proc = _run_example(data_dir)

    assert "Recorded 5 cities and 4 roads" in proc.stdout
    assert proc.stderr == ""
    rows = (data_dir / "roads.txt").read_text(encoding="utf-8").splitlines()
    assert rows[0] == "Nbr\tRoad\t\t\tBudget"
    assert "1\tKigali - Huye\t320.0" in rows
    assert any(row.endswith("Kigali - Nyagatare\t0.0") for row in rows)


def test_example_script_is_rerunnable(tmp_path: Path):
    # A second run finds everything already recorded and leaves ids unchanged.
    data_dir = tmp_path / "data"
    _run_example(data_dir)
    first = (data_dir / "roads.txt").read_bytes()

    _run_example(data_dir)

    assert (data_dir / "roads.txt").read_bytes() == first
