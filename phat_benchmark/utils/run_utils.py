from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pandas as pd

from .stats import RunResult

RESULT_COLUMNS = ["input_path", "algorithm", "representation", "ansatz", "elapsed_seconds"]
GROUP_COLUMNS = ["input_path", "algorithm", "representation", "ansatz"]


def create_run_folder(base_dir: str | Path = "runs") -> Path:
    """
    Create a new timestamped run folder:
        runs/run_YYYYMMDD_HHMMSS/

    A folder that already exists is never reused; later runs within the same
    second get a numeric suffix (run_YYYYMMDD_HHMMSS_1, ...).

    Returns:
        Path object of the new directory.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    base = Path(base_dir)
    base.mkdir(parents=True, exist_ok=True)

    suffix = 0
    while True:
        name = f"run_{timestamp}" if suffix == 0 else f"run_{timestamp}_{suffix}"
        run_dir = base / name
        try:
            run_dir.mkdir()
        except FileExistsError:
            suffix += 1
            continue
        return run_dir


def save_config(config, run_dir: Path) -> Path:
    """
    Save the RunConfiguration as a JSON file inside the run directory.
    """
    config_path = run_dir / "config.json"
    with config_path.open("w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=4)
    return config_path


def get_log_file_path(run_dir: Path) -> Path:
    """
    Return the path where the log file should be stored.
    """
    return run_dir / "log.txt"


class ResultRecorder:
    """
    Appends every RunResult to ``results.csv`` as soon as it is produced.

    Rows are written one at a time so that a sweep aborted by a load failure
    still leaves the completed runs on disk.
    """

    def __init__(self, run_dir: Path):
        self.run_dir = run_dir
        self.csv_path = run_dir / "results.csv"
        self._started = False

    def record(self, result: RunResult) -> None:
        df = pd.DataFrame([result.as_row()], columns=RESULT_COLUMNS)
        # The first row truncates any existing file; later rows append.
        mode = "a" if self._started else "w"
        df.to_csv(self.csv_path, mode=mode, index=False, header=not self._started)
        self._started = True


def summarize_results(csv_path: Path) -> pd.DataFrame:
    """
    Aggregate elapsed time per combination (count, mean, min, max).

    Repeated flags produce several rows per combination; the summary keeps
    the first-seen order of combinations.
    """
    df = pd.read_csv(csv_path)
    summary = (
        df.groupby(GROUP_COLUMNS, sort=False)["elapsed_seconds"]
        .agg(["count", "mean", "min", "max"])
        .reset_index()
    )
    return summary


def save_summary(csv_path: Path, run_dir: Path) -> pd.DataFrame:
    summary = summarize_results(csv_path)
    summary.to_csv(run_dir / "summary.csv", index=False)
    return summary
