# ui/main_window.py
import logging

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QComboBox, QFileDialog, QInputDialog, QLabel, QMessageBox, QPushButton
)
from PySide6.QtCore import Qt

from app import config
from app.snippets import LANGUAGES
from core.chrono import TickTimer
from core.threads import TextLoadWorker, Workers
from services.leaderboard import LeaderboardStore
from services.metrics import MetricsPresenter
from services.session_driver import SessionDriver
from ui.leaderboard_dialog import LeaderboardDialog
from ui.metrics_panel import MetricsPanel
from ui.widgets.code_block import BACKSPACE, CodeBlock
from utils.db_helper import SqliteStore
from utils.file_handler import upload_filter

logger = logging.getLogger(__name__)

STYLE = """
QWidget { background: #0f1115; color: #e5e7eb; }
QWidget#TopBar {
    background: rgba(255,255,255,0.04);
    border: 1px solid rgba(255,255,255,0.08);
    border-radius: 14px;
}
QPushButton#TopBtn, QComboBox#TopBtn {
    background: transparent;
    border: 1px solid rgba(255,255,255,0.10);
    border-radius: 9px;
    padding: 6px 12px;
}
QPushButton#TopBtn:hover {
    border-color: rgba(255,255,255,0.32);
    background: rgba(255,255,255,0.06);
}
QProgressBar { border: 1px solid rgba(255,255,255,0.10); border-radius: 4px; height: 8px; }
QProgressBar::chunk { background: #eab308; }
"""


class MainWindow(QMainWindow):
    def __init__(self, store=None):
        super().__init__()
        self.setWindowTitle(config.APP_NAME)
        self.resize(1200, 760)

        self.leaderboard = LeaderboardStore(store or SqliteStore())
        self.presenter = MetricsPresenter()
        self.ticker = TickTimer(self)

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(16, 24, 16, 16)
        root_v.setSpacing(18)
        self._build_top_bar(root_v)

        self.codeBlock = CodeBlock(self, font_size=16)
        self.codeBlock.key_pressed.connect(self._on_key)
        root_v.addWidget(self.codeBlock, 3)

        self.lblProgress = QLabel("", self)
        self.lblProgress.setAlignment(Qt.AlignRight)
        root_v.addWidget(self.lblProgress)

        self.metrics = MetricsPanel(self)
        self.presenter.add_sink(self.metrics)
        root_v.addWidget(self.metrics, 2)

        self.setCentralWidget(root)
        self.setStyleSheet(STYLE)

        self.driver = SessionDriver(self.presenter, self.ticker, show_text=self._show_text)
        self.driver.reset()

    # ---------------- Top Bar ----------------
    def _build_top_bar(self, parent_layout):
        bar = QWidget(self)
        bar.setObjectName("TopBar")
        h = QHBoxLayout(bar)
        h.setContentsMargins(14, 12, 14, 12)
        h.setSpacing(10)

        self.cmbLanguage = QComboBox(bar)
        self.cmbLanguage.addItems(LANGUAGES)
        self.cmbLanguage.setObjectName("TopBtn")
        self.cmbLanguage.setFocusPolicy(Qt.NoFocus)
        h.addWidget(self.cmbLanguage)

        for text, handler in [
            ("Start", self._on_start),
            ("Reset", self._on_reset),
            ("Upload…", self._on_upload),
            ("Generate", self._on_generate),
        ]:
            h.addWidget(self._button(bar, text, handler))

        h.addStretch(1)

        for text, handler in [
            ("Submit score…", self._on_submit),
            ("Leaderboard…", self._on_leaderboard),
        ]:
            h.addWidget(self._button(bar, text, handler))

        parent_layout.addWidget(bar)

    def _button(self, bar, text, handler):
        button = QPushButton(text, bar)
        button.clicked.connect(handler)
        button.setObjectName("TopBtn")
        # keep keyboard focus on the code block
        button.setFocusPolicy(Qt.NoFocus)
        return button

    @property
    def language(self) -> str:
        return self.cmbLanguage.currentText()

    # ---------------- Editor ----------------
    def _show_text(self, text: str):
        self.codeBlock.set_code(text)
        self.lblProgress.setText("")
        self.codeBlock.setFocus()

    def _on_key(self, key: str):
        typed = self.codeBlock.typed
        if key == BACKSPACE:
            typed = typed[:-1]
        else:
            self.driver.keystroke(key, len(typed))
            typed += key
        self.codeBlock.set_typed(typed)
        progress = self.driver.check_progress(typed)
        if progress is not None:
            self.lblProgress.setText(f"{progress.accuracy:0.1f}% of snippet · {progress.wpm} WPM")

    # ---------------- Commands ----------------
    def _on_start(self):
        self.metrics.clear_history()
        snippet = self.driver.start(self.language)
        if snippet is None:
            self.statusBar().showMessage(f"No snippets for {self.language}", 3000)
            return
        self.setWindowTitle(f"{config.APP_NAME} — {snippet.title}")

    def _on_reset(self):
        self.driver.reset()
        self.setWindowTitle(config.APP_NAME)

    def _on_upload(self):
        path, _ = QFileDialog.getOpenFileName(self, "Upload code", "", upload_filter())
        if not path:
            return
        worker = TextLoadWorker(path)
        worker.signals.loaded.connect(self._on_loaded_text)
        worker.signals.failed.connect(self._on_load_failed)
        Workers.pool.start(worker)

    def _on_loaded_text(self, text: str, language: str):
        if language:
            self.cmbLanguage.setCurrentText(language)
        self.driver.upload(text)

    def _on_load_failed(self, msg: str):
        logger.warning("Upload failed: %s", msg)
        QMessageBox.warning(self, "Upload", msg)

    def _on_generate(self):
        snippet = self.driver.load_generated(self.language, "medium")
        self.setWindowTitle(f"{config.APP_NAME} — {snippet.title}")

    # ---------------- Leaderboard ----------------
    def _on_submit(self):
        if not self.driver.is_active:
            self.statusBar().showMessage("Start a challenge first", 3000)
            return
        username, ok = QInputDialog.getText(self, "Submit score", "Username:")
        if not ok or not username.strip():
            return
        entry = self.driver.submit_score(username.strip(), self.leaderboard)
        if entry is not None:
            self.statusBar().showMessage(f"Saved {entry.score} for {entry.username}", 3000)

    def _on_leaderboard(self):
        language = self.driver.challenge.language or self.language
        LeaderboardDialog(self.leaderboard, language, self).exec()

    def closeEvent(self, event):
        self.ticker.cancel()
        super().closeEvent(event)
