"""Matplotlib-based chart helpers for TreasuryYieldLab."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ..core import ChartSeries, YieldPoint


class Visualizer:
    """Collection of static helpers that turn analytics outputs into charts."""

    @staticmethod
    def _plt():
        try:
            import matplotlib.pyplot as plt
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(
                "matplotlib is required for visualization. Install via pip."
            ) from exc
        return plt

    @staticmethod
    def _series_chart(
        series: ChartSeries,
        *,
        title: str,
        label: str,
        color: str,
        save_path: str | None,
        show: bool,
    ) -> None:
        if not len(series):
            return
        plt = Visualizer._plt()
        plt.figure(figsize=(10, 6))
        plt.plot(series.labels, series.data, label=label, color=color, marker="o")
        plt.xlabel("Harvest date")
        plt.ylabel("% of treasury")
        plt.title(title)
        plt.xticks(rotation=45, ha="right")
        plt.legend()
        plt.tight_layout()
        if save_path:
            plt.savefig(save_path, bbox_inches="tight")
        if show:
            plt.show()

    @staticmethod
    def yield_chart(
        series: ChartSeries,
        title: str = "Harvest Yield as % of Treasury",
        *,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        Visualizer._series_chart(
            series,
            title=title,
            label="Harvest yield",
            color="#0072B5",
            save_path=save_path,
            show=show,
        )

    @staticmethod
    def cumulative_yield_chart(
        series: ChartSeries,
        title: str = "Cumulative Yield as % of Treasury",
        *,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        Visualizer._series_chart(
            series,
            title=title,
            label="Cumulative yield",
            color="#FF6384",
            save_path=save_path,
            show=show,
        )

    @staticmethod
    def rolling_apr_chart(
        series: ChartSeries,
        title: str = "Rolling APR",
        *,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        """Plot :func:`~treasury_yield_lab.analytics.yields.rolling_apr_series` output."""

        Visualizer._series_chart(
            series,
            title=title,
            label="Rolling APR (%)",
            color="#2E8B57",
            save_path=save_path,
            show=show,
        )

    @staticmethod
    def harvest_value_chart(
        points: Sequence[YieldPoint],
        title: str = "Harvest Value (USD)",
        *,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        """Plot the summed USD value of each harvest day."""

        values = pd.Series(
            [p.total_usd for p in points],
            index=pd.DatetimeIndex([p.date for p in points]),
            name="Harvest value",
        )
        Visualizer.line_chart(values, title=title, ylabel="USD", save_path=save_path, show=show)

    @staticmethod
    def line_chart(
        data: pd.DataFrame | pd.Series,
        *,
        title: str,
        ylabel: str,
        save_path: str | None = None,
        show: bool = True,
    ) -> None:
        """Plot one line per column of a timestamp-indexed frame.

        A Series is drawn as a single line labelled with its name. Empty input
        draws nothing.
        """
        frame = data.to_frame() if isinstance(data, pd.Series) else data
        if frame.empty:
            return
        plt = Visualizer._plt()
        plt.figure(figsize=(10, 6))
        dates = list(frame.index)
        for column in frame.columns:
            plt.plot(dates, frame[column].tolist(), label=str(column), marker="o")
        plt.xlabel("Harvest date")
        plt.ylabel(ylabel)
        plt.title(title)
        plt.xticks(rotation=45, ha="right")
        plt.legend()
        plt.tight_layout()
        if save_path:
            plt.savefig(save_path, bbox_inches="tight")
        if show:
            plt.show()
