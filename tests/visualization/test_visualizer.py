"""Tests for visualization helpers capturing Matplotlib interactions."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pandas as pd
import pytest

from treasury_yield_lab.core import ChartSeries, YieldPoint
from treasury_yield_lab.visualization import Visualizer


class MatplotlibSpy:
    """Spy object replicating the minimal Matplotlib API used by Visualizer."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def _record(self, name: str, args: Iterable[Any] = (), **kwargs: Any) -> None:
        self.calls.append((name, tuple(args), dict(kwargs)))

    # plotting primitives -------------------------------------------------
    def figure(self, *args: Any, **kwargs: Any) -> None:  # pragma: no cover - simple proxy
        self._record("figure", args, **kwargs)

    def plot(self, x: Iterable[Any], y: Iterable[Any], *args: Any, **kwargs: Any) -> None:
        self._record("plot", (list(x), list(y), *args), **kwargs)

    # labelling helpers ---------------------------------------------------
    def title(self, *args: Any, **kwargs: Any) -> None:
        self._record("title", args, **kwargs)

    def ylabel(self, *args: Any, **kwargs: Any) -> None:
        self._record("ylabel", args, **kwargs)

    def xlabel(self, *args: Any, **kwargs: Any) -> None:
        self._record("xlabel", args, **kwargs)

    def legend(self, *args: Any, **kwargs: Any) -> None:
        self._record("legend", args, **kwargs)

    def xticks(self, *args: Any, **kwargs: Any) -> None:
        self._record("xticks", args, **kwargs)

    def tight_layout(self, *args: Any, **kwargs: Any) -> None:
        self._record("tight_layout", args, **kwargs)

    def savefig(self, *args: Any, **kwargs: Any) -> None:
        self._record("savefig", args, **kwargs)

    def show(self, *args: Any, **kwargs: Any) -> None:
        self._record("show", args, **kwargs)

    # utilities -----------------------------------------------------------
    def get_call(self, name: str) -> tuple[str, tuple[Any, ...], dict[str, Any]]:
        for call in self.calls:
            if call[0] == name:
                return call
        msg = f"no call named {name!r} recorded"
        raise AssertionError(msg)


@pytest.fixture()
def spy(monkeypatch: pytest.MonkeyPatch) -> MatplotlibSpy:
    canvas = MatplotlibSpy()
    monkeypatch.setattr(Visualizer, "_plt", staticmethod(lambda: canvas))
    return canvas


@pytest.fixture()
def series() -> ChartSeries:
    return ChartSeries(labels=["01/01/2024", "08/01/2024"], data=[0.5, 1.25])


def test_yield_chart_plots_labels_against_percentages(
    spy: MatplotlibSpy, series: ChartSeries
) -> None:
    Visualizer.yield_chart(series, show=False)

    plot_call = spy.get_call("plot")
    assert plot_call[1][0] == ["01/01/2024", "08/01/2024"]
    assert plot_call[1][1] == [0.5, 1.25]
    assert plot_call[2]["color"] == "#0072B5"

    assert spy.get_call("title")[1][0] == "Harvest Yield as % of Treasury"
    assert spy.get_call("ylabel")[1][0] == "% of treasury"
    assert not any(call[0] == "show" for call in spy.calls)


def test_cumulative_chart_saves_when_path_given(spy: MatplotlibSpy, series: ChartSeries) -> None:
    Visualizer.cumulative_yield_chart(series, save_path="cumulative.png", show=True)

    assert spy.get_call("title")[1][0] == "Cumulative Yield as % of Treasury"
    assert spy.get_call("savefig")[1][0] == "cumulative.png"
    assert any(call[0] == "show" for call in spy.calls)


def test_rolling_apr_chart_label(spy: MatplotlibSpy, series: ChartSeries) -> None:
    Visualizer.rolling_apr_chart(series, title="APR", show=False)
    assert spy.get_call("plot")[2]["label"] == "Rolling APR (%)"
    assert spy.get_call("title")[1][0] == "APR"


def test_empty_series_draws_nothing(spy: MatplotlibSpy) -> None:
    Visualizer.yield_chart(ChartSeries(), show=False)
    assert spy.calls == []


def test_line_chart_plots_each_series(spy: MatplotlibSpy) -> None:
    data = pd.DataFrame(
        {
            "yield_pct": [1.0, 1.1],
            "cumulative_pct": [1.0, 2.1],
        },
        index=pd.date_range("2024-01-01", periods=2, freq="D"),
    )

    Visualizer.line_chart(data, title="Yield", ylabel="%", show=False, save_path=None)

    plot_calls = [call for call in spy.calls if call[0] == "plot"]
    assert len(plot_calls) == data.shape[1]
    expected_index = list(data.index)
    for column, call in zip(data.columns, plot_calls, strict=True):
        assert call[1][0] == expected_index
        assert call[1][1] == data[column].tolist()
        assert call[2]["label"] == column

    ylabel_call = spy.get_call("ylabel")
    assert ylabel_call[1][0] == "%"

    assert any(call[0] == "legend" for call in spy.calls)


def test_harvest_value_chart_plots_usd_per_day(spy: MatplotlibSpy) -> None:
    points = [YieldPoint("2024-01-01", 80.0), YieldPoint("2024-01-08", 25.0)]

    Visualizer.harvest_value_chart(points, save_path="usd.png", show=False)

    plot_call = spy.get_call("plot")
    assert plot_call[1][0] == [p.date for p in points]
    assert plot_call[1][1] == [80.0, 25.0]
    assert plot_call[2]["label"] == "Harvest value"
    assert spy.get_call("title")[1][0] == "Harvest Value (USD)"
    assert spy.get_call("ylabel")[1][0] == "USD"
    assert spy.get_call("savefig")[1][0] == "usd.png"


def test_harvest_value_chart_without_points_draws_nothing(spy: MatplotlibSpy) -> None:
    Visualizer.harvest_value_chart([], show=False)
    assert spy.calls == []
