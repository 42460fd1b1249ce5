from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from scipy.stats import gaussian_kde

# ============================================================
# Utilities
# ============================================================

def _prepare_plot_dir(out_dir: Path):
    out_dir.mkdir(parents=True, exist_ok=True)

def _distribution_panels(df: pd.DataFrame) -> list[str]:
    """Algorithm labels present in ``df``, in first-seen order."""
    return list(dict.fromkeys(df["algorithm"]))

# ============================================================
# Runtime per representation, one panel per algorithm
# ============================================================

def plot_runtime_by_representation(df: pd.DataFrame, out_dir: Path) -> Path:
    """
    Grouped bar chart of mean reduction time per representation, split by
    ansatz, with one panel per algorithm. Error bars show the spread across
    repeated runs and input files.
    """
    sns.set_style("whitegrid")
    algorithms = _distribution_panels(df)

    grid = sns.catplot(
        data=df,
        kind="bar",
        x="representation",
        y="elapsed_seconds",
        hue="ansatz",
        col="algorithm",
        col_order=algorithms,
        col_wrap=min(len(algorithms), 2),
        errorbar="sd",
        height=4.5,
        aspect=1.4,
        sharey=False,
    )
    grid.set_axis_labels("Representation", "Runtime (sec)")
    grid.set_titles("{col_name}")
    for ax in grid.axes.flat:
        ax.tick_params(axis="x", rotation=30)

    grid.figure.suptitle("Reduction Runtime by Representation", fontsize=15, fontweight="bold", y=1.03)

    save_path = out_dir / "runtime_by_representation.png"
    grid.savefig(save_path, dpi=220, bbox_inches="tight")
    plt.close(grid.figure)
    return save_path

# ============================================================
# Runtime distributions (PDF + CDF)
# ============================================================

def _plot_pdf_cdf_on_ax(ax, values, label: str):
    values = np.asarray(values, dtype=float)
    values = values[np.isfinite(values)]

    if len(values) < 2:
        ax.text(0.5, 0.5, "Insufficient data", ha="center", va="center")
        return [], []

    if np.all(values == values[0]):
        line = ax.axvline(values[0], color="tab:blue", lw=2, label=f"{label} (Const)")
        return [line], [f"{label} (Const)"]

    # PDF
    handles, labels = [], []
    try:
        kde = gaussian_kde(values)
    except np.linalg.LinAlgError:
        kde = None
    if kde is not None:
        x_range = np.linspace(values.min(), values.max(), 500)
        pdf_values = kde(x_range)
        pdf_handle, = ax.plot(x_range, pdf_values, lw=2, label="PDF")
        ax.fill_between(x_range, pdf_values, alpha=0.1)
        handles.append(pdf_handle)
        labels.append("PDF")

    # CDF on Twin Axis
    ax_cdf = ax.twinx()
    sorted_vals = np.sort(values)
    cdf_y = np.linspace(0, 1, len(sorted_vals))
    cdf_handle, = ax_cdf.plot(sorted_vals, cdf_y, "--", color="tab:orange", lw=1.5, label="CDF")
    ax_cdf.set_ylim(0, 1.05)
    ax_cdf.tick_params(axis='y', labelcolor="tab:orange", labelsize=7)
    handles.append(cdf_handle)
    labels.append("CDF")

    return handles, labels


def plot_runtime_distribution(df: pd.DataFrame, out_dir: Path) -> Path:
    """
    Runtime distribution of each benchmarked reduction algorithm across all
    representations, ansaetze and files. Up to a 2x2 grid.
    """
    panels = _distribution_panels(df)
    ncols = min(max(len(panels), 1), 2)
    nrows = max(-(-len(panels) // 2), 1)
    fig, axes = plt.subplots(nrows, ncols, figsize=(7 * ncols, 5 * nrows), squeeze=False)
    axes = axes.flatten()

    for ax, label in zip(axes, panels):
        vals = df.loc[df["algorithm"] == label, "elapsed_seconds"]
        h, l = _plot_pdf_cdf_on_ax(ax, vals, label)
        ax.set_title(f"{label} Runtime (sec)")
        if h:
            ax.legend(h, l, loc="upper right", fontsize=8)

    for j in range(len(panels), len(axes)):
        axes[j].axis('off')

    plt.tight_layout(rect=[0, 0.03, 1, 0.95])
    save_path = out_dir / "runtime_pdf_cdf_subplots.png"
    plt.savefig(save_path, dpi=220)
    plt.close(fig)
    return save_path


def plot_results(csv_path: Path, out_dir: Path) -> list[Path]:
    df = pd.read_csv(csv_path)
    _prepare_plot_dir(out_dir)
    return [
        plot_runtime_by_representation(df, out_dir),
        plot_runtime_distribution(df, out_dir),
    ]
