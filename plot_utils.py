#!/usr/bin/env python3
"""
plot_utils.py

Boxplots of benchmark durations using seaborn.

Typical workflow:

1) Produce a CSV, either a single run:
       python main.py -i resources/maze.txt -s 50 -a 10 --output-dir outputs
   (writes outputs/run_.../records.csv)
   or a parameter sweep:
       python batch_run.py
   (writes outputs_batch/batch_results.csv)

2) Plot it:
        from plot_utils import plot_boxplots_from_csv

        plot_boxplots_from_csv(
            csv_path="outputs_batch/batch_results.csv",
            group_by=["pathfinding.algorithm"],
            metrics=["random.max", "pathfinding.avg_runtime"],
            output_dir="outputs_batch/plots",
            show=False,
        )

   or run this file directly to use the DEFAULT_* constants at the bottom.
"""

import logging
from pathlib import Path
from typing import Sequence, Optional, Union, Dict

import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

import seaborn as sns

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_results(csv_path: PathLike, group_by: Sequence[str], metrics: Sequence[str]) -> pd.DataFrame:
    """Read the CSV and check that every requested column exists."""
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {csv_path}")

    df = pd.read_csv(csv_path)
    for col in list(group_by) + list(metrics):
        if col not in df.columns:
            raise ValueError(
                f"column '{col}' not found in CSV. "
                f"Available columns include: {list(df.columns)[:20]} ..."
            )
    return df


def group_stats(df: pd.DataFrame, group_col: str, metric: str) -> pd.DataFrame:
    """count / median / quartiles / min / max of `metric` per group."""
    return (
        df[[group_col, metric]]
        .dropna()
        .groupby(group_col)[metric]
        .agg(
            n="count",
            median="median",
            q1=lambda s: s.quantile(0.25),
            q3=lambda s: s.quantile(0.75),
            min="min",
            max="max",
        )
    )


def plot_boxplots_from_csv(
    csv_path: PathLike,
    group_by: Sequence[str],
    metrics: Sequence[str],
    output_dir: Optional[PathLike] = None,
    show: bool = False,
    figsize_per_group: float = 1.5,
    x_axis_label: Optional[str] = None,
    seaborn_style: str = "whitegrid",
    palette_name: str = "colorblind",
    title_template: Optional[str] = None,
    y_axis_labels: Optional[Dict[str, str]] = None,
    log_scale: bool = True,
) -> list:
    """
    Make one seaborn boxplot per metric, grouped by the given columns.

    Parameters
    ----------
    csv_path : str or Path
        records.csv from a single run or batch_results.csv from batch_run.py.
    group_by : list[str]
        Column(s) to group by. Several columns are joined into one label
        per row ("a | b").
    metrics : list[str]
        Numeric columns to plot, e.g. ['elapsed'] or ['random.max'].
    output_dir : str or Path or None
        If given, each plot is saved there as PDF.
    show : bool
        Call plt.show() instead of closing the figures.
    log_scale : bool
        Log y-axis (durations usually span orders of magnitude).

    Returns
    -------
    list[Path]
        Saved files (empty when output_dir is None).
    """
    TITLE_FONTSIZE = 16
    AXIS_LABEL_FONTSIZE = 14
    LEGEND_FONTSIZE = 10
    MAX_LEGEND_COLS = 8

    group_by = list(group_by)
    metrics = list(metrics)
    df = load_results(csv_path, group_by, metrics)

    if len(group_by) == 1:
        group_label_col = group_by[0]
    else:
        group_label_col = "__group_label__"
        df[group_label_col] = df[group_by].astype(str).agg(" | ".join, axis=1)
    df[group_label_col] = df[group_label_col].astype(str)

    if output_dir is not None:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

    categories = sorted(df[group_label_col].unique())
    n_groups = len(categories)
    x_label_text = x_axis_label if x_axis_label is not None else " | ".join(group_by)

    sns.set_style(seaborn_style)
    sns.set_context("paper", font_scale=1.2)
    palette = sns.color_palette(palette_name, n_colors=max(1, n_groups))
    palette_mapping = dict(zip(categories, palette))

    saved = []
    for metric in metrics:
        sub = df[[group_label_col, metric]].dropna()
        if sub.empty:
            logger.warning("No data for metric '%s' after dropping NaNs. Skipping.", metric)
            continue

        stats = group_stats(sub, group_label_col, metric).reindex(categories)
        logger.info("%s\n%s", metric, stats.to_string(float_format=lambda x: f"{x:.4g}"))

        width = max(6.0, figsize_per_group * max(1, n_groups))
        fig, ax = plt.subplots(figsize=(width, 6))
        sns.boxplot(
            data=sub,
            x=group_label_col,
            y=metric,
            hue=group_label_col,
            order=categories,
            palette=palette_mapping,
            dodge=False,
            ax=ax,
        )

        if title_template is None:
            title_text = f"{metric} by {', '.join(group_by)}"
        else:
            title_text = title_template.format(metric=metric)
        ax.set_title(title_text, fontsize=TITLE_FONTSIZE, pad=28)
        ax.set_xlabel(x_label_text, fontsize=AXIS_LABEL_FONTSIZE)
        ax.set_ylabel(
            y_axis_labels.get(metric, metric) if y_axis_labels else metric,
            fontsize=AXIS_LABEL_FONTSIZE,
        )
        ax.tick_params(axis="x", labelrotation=45)

        if log_scale:
            ax.set_yscale("log")

        handles = [mpatches.Patch(color=palette_mapping[c], label=c) for c in categories]
        ax.legend(
            handles=handles,
            title="",
            loc="upper center",
            bbox_to_anchor=(0.5, 1.08),
            ncol=min(len(handles), MAX_LEGEND_COLS),
            frameon=False,
            fontsize=LEGEND_FONTSIZE,
        )
        fig.tight_layout(rect=[0, 0, 1, 0.99])

        if output_dir is not None:
            safe_metric = metric.replace(".", "_").replace(" ", "_")
            safe_groups = "_".join(g.replace(".", "_") for g in group_by)
            fname = output_dir / f"box_{safe_metric}_by_{safe_groups}.pdf"
            fig.savefig(fname, dpi=150, bbox_inches="tight")
            logger.info("Saved boxplot for '%s' to %s", metric, fname)
            saved.append(fname)

        if show:
            plt.show()
        else:
            plt.close(fig)
    return saved


# ---------------------------------------------------------------------
# Default behavior when running this file directly
# ---------------------------------------------------------------------
DEFAULT_CSV = "outputs_batch/batch_results.csv"
DEFAULT_GROUP_BY = ["pathfinding.algorithm"]
DEFAULT_METRICS = ["pathfinding.avg_runtime", "random.max"]
DEFAULT_OUTPUT_DIR = "outputs_batch/plots"
DEFAULT_TITLE = "Pathfinding Algorithm Comparison"


def _run_with_defaults() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    plot_boxplots_from_csv(
        csv_path=DEFAULT_CSV,
        group_by=DEFAULT_GROUP_BY,
        metrics=DEFAULT_METRICS,
        output_dir=DEFAULT_OUTPUT_DIR,
        x_axis_label="pathfinding algorithm",
        title_template=DEFAULT_TITLE,
        y_axis_labels={
            "pathfinding.avg_runtime": "Average search runtime (s)",
            "random.max": "Slowest timed block (s)",
        },
        log_scale=True,
    )


if __name__ == "__main__":
    _run_with_defaults()
