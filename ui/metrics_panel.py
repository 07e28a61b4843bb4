# ui/metrics_panel.py
from collections import deque

import pyqtgraph as pg
from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout, QHBoxLayout, QLabel, QProgressBar, QVBoxLayout, QWidget
)

from services.keystats import ALL_KEYS, KeyState
from services.metrics import MetricsView
from utils.graph_helper import setup_wpm_plot, update_curve

KEY_STYLES = {
    KeyState.CURRENT: "background:#eab308; color:#0f1115;",
    KeyState.CORRECT: "background:rgba(34,197,94,0.35); color:#e5e7eb;",
    KeyState.WRONG: "background:rgba(239,68,68,0.35); color:#e5e7eb;",
    KeyState.NEUTRAL: "background:rgba(255,255,255,0.05); color:#6b7280;",
}
DELTA_COLORS = {"positive": "#22c55e", "negative": "#ef4444", "": "transparent"}


class MetricsPanel(QWidget):
    """Render sink for MetricsPresenter: numbers, deltas, key heat-map and goal bar."""

    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(12)

        grid = QGridLayout()
        grid.setHorizontalSpacing(24)
        self.lblWPM, self.lblWPMDelta = self._metric(grid, 0, "WPM")
        self.lblAcc, self.lblAccDelta = self._metric(grid, 1, "Accuracy")
        self.lblScore, self.lblScoreDelta = self._metric(grid, 2, "Score")
        root.addLayout(grid)

        facts = QGridLayout()
        self.lblLastSpeed = self._fact(facts, 0, "Last speed")
        self.lblTopSpeed = self._fact(facts, 1, "Top speed")
        self.lblLearning = self._fact(facts, 2, "Learning rate")
        self.lblStreak = self._fact(facts, 3, "Accuracy streak")
        root.addLayout(facts)

        goal = QHBoxLayout()
        goal.addWidget(QLabel("Daily goal", self))
        self.goalBar = QProgressBar(self)
        self.goalBar.setRange(0, 1000)
        self.goalBar.setTextVisible(False)
        goal.addWidget(self.goalBar, 1)
        self.lblGoal = QLabel("0%/30 minutes", self)
        goal.addWidget(self.lblGoal)
        root.addLayout(goal)

        keys = QHBoxLayout()
        keys.setSpacing(4)
        self.keyLabels = {}
        for k in ALL_KEYS:
            lab = QLabel(k, self)
            lab.setAlignment(Qt.AlignCenter)
            lab.setFixedSize(26, 26)
            keys.addWidget(lab)
            self.keyLabels[k] = lab
        keys.addStretch(1)
        self.lblCurrentKey = QLabel("", self)
        self.lblCurrentKey.setStyleSheet("font-size: 22px; font-weight: 600;")
        keys.addWidget(self.lblCurrentKey)
        root.addLayout(keys)

        self.wpmPlot = pg.PlotWidget()
        self.wpmPlot.setMinimumHeight(120)
        self._wpm_curve = setup_wpm_plot(self.wpmPlot, "#eab308")
        self._wpm_vals = deque(maxlen=600)
        root.addWidget(self.wpmPlot)

    def _metric(self, grid, col, title):
        grid.addWidget(QLabel(title, self), 0, col)
        value = QLabel("0", self)
        value.setStyleSheet("font-size: 28px;")
        delta = QLabel("", self)
        row = QHBoxLayout()
        row.addWidget(value)
        row.addWidget(delta)
        row.addStretch(1)
        grid.addLayout(row, 1, col)
        return value, delta

    def _fact(self, grid, row, title):
        grid.addWidget(QLabel(title, self), row, 0)
        value = QLabel("", self)
        grid.addWidget(value, row, 1)
        return value

    @staticmethod
    def _set_delta(label: QLabel, delta):
        label.setText(delta.text)
        label.setStyleSheet(f"color: {DELTA_COLORS.get(delta.tone, 'transparent')};")

    def render(self, view: MetricsView):
        self.lblWPM.setText(f"{view.wpm:0.1f}")
        self.lblAcc.setText(f"{view.accuracy:0.1f} %")
        self.lblScore.setText(str(view.score))
        self._set_delta(self.lblWPMDelta, view.wpm_delta)
        self._set_delta(self.lblAccDelta, view.accuracy_delta)
        self._set_delta(self.lblScoreDelta, view.score_delta)

        self.lblLastSpeed.setText(view.last_speed)
        self.lblTopSpeed.setText(view.top_speed)
        self.lblLearning.setText(view.learning_rate)
        self.lblStreak.setText(view.streak)
        self.lblGoal.setText(view.goal_text)
        self.goalBar.setValue(int(view.goal_width * 10))

        for key, state in view.heatmap:
            self.keyLabels[key].setStyleSheet(f"border-radius:4px; {KEY_STYLES[state]}")
        self.lblCurrentKey.setText(view.current_key)

        self._wpm_vals.append(view.wpm)
        update_curve(self._wpm_curve, self._wpm_vals)

    def clear_history(self):
        self._wpm_vals.clear()
        update_curve(self._wpm_curve, self._wpm_vals)
