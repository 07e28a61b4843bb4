# ui/leaderboard_dialog.py
from datetime import datetime

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)
import csv
import pyqtgraph as pg

from app.snippets import LANGUAGES
from utils.graph_helper import setup_bar_plot, update_bars


class LeaderboardDialog(QDialog):
    COLUMNS = ["#", "User", "Score", "WPM", "Accuracy", "When"]

    def __init__(self, leaderboard, language: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Leaderboard")
        self.resize(680, 520)
        self.leaderboard = leaderboard

        root = QVBoxLayout(self)

        ctrl = QHBoxLayout()
        ctrl.addWidget(QLabel("Language:"))
        self.cmb_language = QComboBox()
        self.cmb_language.addItems(LANGUAGES)
        if language in LANGUAGES:
            self.cmb_language.setCurrentText(language)
        self.cmb_language.currentTextChanged.connect(self._render)
        ctrl.addWidget(self.cmb_language)
        ctrl.addStretch(1)
        self.btn_export = QPushButton("Export CSV…")
        self.btn_export.clicked.connect(self._export_csv)
        ctrl.addWidget(self.btn_export)
        root.addLayout(ctrl)

        self.plot = pg.PlotWidget()
        self._bars = setup_bar_plot(self.plot, "Score")
        root.addWidget(self.plot, stretch=2)

        self.table = QTableWidget(0, len(self.COLUMNS))
        self.table.setHorizontalHeaderLabels(self.COLUMNS)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        root.addWidget(self.table, stretch=1)

        self._render()

    def _entries(self):
        return self.leaderboard.get_leaderboard(self.cmb_language.currentText())

    def _render(self, *_):
        entries = self._entries()
        update_bars(self.plot, self._bars, [e.username for e in entries], [e.score for e in entries])

        self.table.setRowCount(len(entries))
        for i, e in enumerate(entries):
            when = datetime.fromtimestamp(e.timestamp / 1000).strftime("%Y-%m-%d %H:%M")
            cells = [str(i + 1), e.username, str(e.score), f"{e.wpm:.1f}", f"{e.accuracy:.1f}%", when]
            for col, text in enumerate(cells):
                self.table.setItem(i, col, QTableWidgetItem(text))

    def _export_csv(self):
        language = self.cmb_language.currentText()
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Leaderboard", f"leaderboard_{language}.csv", "CSV (*.csv)"
        )
        if not path:
            return
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["Rank", "User", "Score", "WPM", "Accuracy", "Timestamp"])
            for i, e in enumerate(self._entries(), start=1):
                w.writerow([i, e.username, e.score, e.wpm, e.accuracy, e.timestamp])
