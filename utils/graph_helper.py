from typing import List, Sequence
import pyqtgraph as pg


def _quiet(plot_widget: pg.PlotWidget):
    plot_widget.setBackground(None)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.setClipToView(True)


def setup_wpm_plot(plot_widget: pg.PlotWidget, line_color: str):
    _quiet(plot_widget)
    plot_widget.showGrid(x=False, y=True, alpha=0.15)
    plot_widget.getAxis('bottom').setTicks([])
    plot_widget.setLabel('left', 'WPM')
    return plot_widget.plot([], [], pen=pg.mkPen(line_color, width=2.5), antialias=True)


def update_curve(curve, y: Sequence[float]):
    curve.setData(list(range(len(y))), list(y))


def setup_bar_plot(plot_widget: pg.PlotWidget, label: str, brush: str = "#eab308"):
    _quiet(plot_widget)
    plot_widget.showGrid(x=False, y=True, alpha=0.1)
    plot_widget.enableAutoRange("y", True)
    plot_widget.setLabel('left', label)
    bars = pg.BarGraphItem(x=[], height=[], width=0.8, brush=pg.mkBrush(brush))
    plot_widget.addItem(bars)
    return bars


def update_bars(plot_widget: pg.PlotWidget, bars, labels: List[str], heights: Sequence[float]):
    x = list(range(len(labels)))
    bars.setOpts(x=x, height=list(heights), width=0.8)
    plot_widget.getAxis("bottom").setTicks([list(zip(x, labels))])
