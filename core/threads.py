# core/threads.py
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from app.errors import SyntaxRushError
from utils.file_handler import read_source_file


class TextLoadWorkerSignals(QObject):
    loaded = Signal(str, str)  # text, language ("" when unknown)
    failed = Signal(str)


class TextLoadWorker(QRunnable):
    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self.signals = TextLoadWorkerSignals()

    def run(self):
        try:
            text, language = read_source_file(self.path)
        except (OSError, SyntaxRushError) as e:
            self.signals.failed.emit(str(e))
            return
        self.signals.loaded.emit(text, language or "")


class Workers:
    pool = QThreadPool.globalInstance()
