from PySide6.QtWidgets import QPlainTextEdit, QTextEdit
from PySide6.QtGui import QFont, QTextCharFormat, QColor, QTextCursor, QPainter
from PySide6.QtCore import Qt, QRect, QTimer, Signal

BACKSPACE = "<BACKSPACE>"


class CodeBlock(QPlainTextEdit):
    """
    Monospace snippet display. Typed characters are coloured against the
    snippet and every accepted key press is re-emitted as ``key_pressed``.
    """

    key_pressed = Signal(str)

    def __init__(self, parent=None, font_size: int = 16):
        super().__init__(parent)

        self.setReadOnly(True)
        self.setTextInteractionFlags(Qt.NoTextInteraction)
        self.setFocusPolicy(Qt.StrongFocus)

        font = QFont("Courier New", font_size)
        if not font.exactMatch():
            font = QFont("Consolas", font_size)
        if not font.exactMatch():
            font = QFont("Monaco", font_size)
        font.setFixedPitch(True)
        self.setFont(font)

        self.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.setTabStopDistance(4 * self.fontMetrics().horizontalAdvance(" "))

        self._typed = ""
        self._target = ""
        self._caret_visible = False
        self._blink_state = True

        self._color_correct = QColor("#22c55e")
        self._color_error = QColor("#ef4444")
        self._color_untyped = QColor("#9aa1a9")
        self._caret_color = QColor("#eab308")

        self.setStyleSheet("""
            QPlainTextEdit {
                background-color: #0f1115;
                color: #9aa1a9;
                border: none;
                padding: 15px;
            }
        """)

        self._blink_timer = QTimer(self)
        self._blink_timer.timeout.connect(self._blink_caret)
        self._blink_timer.start(500)

    @property
    def typed(self) -> str:
        return self._typed

    @property
    def target(self) -> str:
        return self._target

    def _blink_caret(self):
        if self._caret_visible:
            self._blink_state = not self._blink_state
            self.viewport().update()

    def set_code(self, code: str):
        self.setPlainText(code)
        self._target = code
        self._typed = ""
        self._caret_visible = bool(code)
        self._blink_state = True
        self._apply_colors()
        self._move_caret()

    def set_typed(self, typed: str):
        self._typed = typed
        self._blink_state = True
        self._apply_colors()
        self._move_caret()

    def _apply_colors(self):
        selections = []
        typed_len = len(self._typed)
        for i in range(len(self._target)):
            cursor = QTextCursor(self.document())
            cursor.setPosition(i)
            cursor.setPosition(i + 1, QTextCursor.KeepAnchor)

            fmt = QTextCharFormat()
            if i < typed_len:
                ok = self._typed[i] == self._target[i]
                fmt.setForeground(self._color_correct if ok else self._color_error)
            else:
                fmt.setForeground(self._color_untyped)

            selection = QTextEdit.ExtraSelection()
            selection.cursor = cursor
            selection.format = fmt
            selections.append(selection)
        self.setExtraSelections(selections)

    def _move_caret(self):
        cursor = QTextCursor(self.document())
        cursor.setPosition(min(len(self._typed), len(self.toPlainText())))
        self.setTextCursor(cursor)
        self.ensureCursorVisible()
        self.viewport().update()

    def paintEvent(self, event):
        super().paintEvent(event)
        if self._caret_visible and self._blink_state:
            painter = QPainter(self.viewport())
            rect = self.cursorRect(self.textCursor())
            painter.fillRect(QRect(rect.x(), rect.y(), 3, rect.height()), self._caret_color)
            painter.end()

    def keyPressEvent(self, event):
        if event.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier):
            return super().keyPressEvent(event)
        key = event.key()
        text = event.text()
        if key == Qt.Key_Backspace:
            self.key_pressed.emit(BACKSPACE)
        elif key in (Qt.Key_Return, Qt.Key_Enter):
            self.key_pressed.emit("\n")
        elif key == Qt.Key_Tab:
            self.key_pressed.emit("\t")
        elif text and text >= " ":
            self.key_pressed.emit(text)
        else:
            return super().keyPressEvent(event)
        event.accept()
