"""
PyQt5 GUI interface for Opkit.

A small window over a Session: an input box and an output box, each with
its own page navigation, plus one button per transform. Every button runs
its session call on a worker thread and renders the PageView it returns.
"""

import sys
from typing import Callable, Dict, List, Optional

try:
    from PyQt5.QtWidgets import (
        QApplication, QMainWindow, QVBoxLayout, QGridLayout, QWidget,
        QPushButton, QTextEdit, QLabel, QMessageBox, QGroupBox, QFrame
    )
    from PyQt5.QtCore import Qt, QThread, pyqtSignal
    from PyQt5.QtGui import QFont
except ImportError:
    print("PyQt5 not installed. Please install with: pip install PyQt5")
    sys.exit(1)

from .context import Buffer, PageView, TransformKind
from .datafile import load_data_file
from .errors import OpkitError
from .logging import log_message, set_log_file
from .session import NAVIGATION_MOVES, Session


class SessionTaskThread(QThread):
    """Thread for running one session operation off the UI thread."""

    view_ready = pyqtSignal(object)  # PageView
    error_occurred = pyqtSignal(str)

    def __init__(self, task: Callable[[], PageView]):
        super().__init__()
        self.task = task

    def run(self):
        try:
            self.view_ready.emit(self.task())
        except Exception as e:
            error_msg = f"Operation failed: {e}"
            log_message(error_msg, level="ERROR")
            self.error_occurred.emit(error_msg)


class OpkitMainWindow(QMainWindow):
    """Main application window for Opkit."""

    def __init__(self, session: Session):
        super().__init__()
        self.session = session
        self.threads: List[SessionTaskThread] = []
        # Workers can finish out of order; only views newer than the shown one are drawn
        self.shown_revision: Dict[Buffer, int] = {buffer: -1 for buffer in Buffer}

        self.init_ui()

    def init_ui(self):
        """Initialize the user interface."""
        self.setWindowTitle("Opkit - Operations Toolbox")
        self.setGeometry(100, 100, 900, 800)

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout()
        central_widget.setLayout(main_layout)

        main_layout.addWidget(self.create_input_section())
        main_layout.addWidget(self.create_transform_section())

        separator = QFrame()
        separator.setFrameShape(QFrame.HLine)
        main_layout.addWidget(separator)

        main_layout.addWidget(self.create_output_section())
        main_layout.addWidget(self.create_clear_section())

        self.apply_styles()

    def _text_box(self, placeholder: str) -> QTextEdit:
        box = QTextEdit()
        box.setFont(QFont("Courier New", 10))
        box.setAcceptRichText(False)
        box.setPlaceholderText(placeholder)
        return box

    def _nav_buttons(self, buffer: Buffer) -> QWidget:
        widget = QWidget()
        layout = QGridLayout()
        for col, move in enumerate(NAVIGATION_MOVES):
            button = QPushButton(move.capitalize())
            button.clicked.connect(
                lambda _checked, m=move: self.run_task(lambda: self.session.navigate(buffer, m))
            )
            layout.addWidget(button, 0, col)
        widget.setLayout(layout)
        return widget

    def create_input_section(self) -> QGroupBox:
        """Create the input box with its paging and editing buttons."""
        group = QGroupBox("Input")
        layout = QVBoxLayout()

        self.input_edit = self._text_box(
            "Enter ids separated by newlines or commas (use Paste for large lists)"
        )
        layout.addWidget(self.input_edit)

        self.input_page_label = QLabel("")
        self.input_page_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.input_page_label)
        layout.addWidget(self._nav_buttons(Buffer.INPUT))

        buttons = QWidget()
        grid = QGridLayout()
        actions = [
            ("Full-width commas to ASCII", lambda: self.transform(TransformKind.NORMALIZE_COMMA)),
            ("Add quotes", lambda: self.transform(TransformKind.ADD_QUOTES, Buffer.INPUT)),
            ("Remove quotes", lambda: self.transform(TransformKind.STRIP_QUOTES, Buffer.INPUT)),
            ("Paste", self.paste_input),
        ]
        for col, (title, handler) in enumerate(actions):
            button = QPushButton(title)
            button.clicked.connect(handler)
            grid.addWidget(button, 0, col)
        buttons.setLayout(grid)
        layout.addWidget(buttons)

        group.setLayout(layout)
        return group

    def create_transform_section(self) -> QWidget:
        """Create the encode/decode and format buttons."""
        widget = QWidget()
        grid = QGridLayout()

        encrypt_button = QPushButton("Encrypt")
        encrypt_button.clicked.connect(lambda: self.transform(TransformKind.ENCRYPT))
        decrypt_button = QPushButton("Decrypt")
        decrypt_button.clicked.connect(lambda: self.transform(TransformKind.DECRYPT))
        flip_button = QPushButton("Convert format")
        flip_button.clicked.connect(lambda: self.transform(TransformKind.FORMAT_FLIP))

        grid.addWidget(encrypt_button, 0, 0)
        grid.addWidget(decrypt_button, 0, 1)
        grid.addWidget(flip_button, 1, 0, 1, 2)
        widget.setLayout(grid)
        return widget

    def create_output_section(self) -> QGroupBox:
        """Create the output box with its paging and copy buttons."""
        group = QGroupBox("Output")
        layout = QVBoxLayout()

        self.output_edit = self._text_box("Results are shown here")
        self.output_edit.setReadOnly(True)
        layout.addWidget(self.output_edit)

        self.output_page_label = QLabel("")
        self.output_page_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.output_page_label)
        layout.addWidget(self._nav_buttons(Buffer.OUTPUT))

        buttons = QWidget()
        grid = QGridLayout()
        actions = [
            ("Add quotes", lambda: self.transform(TransformKind.ADD_QUOTES, Buffer.OUTPUT)),
            ("Remove quotes", lambda: self.transform(TransformKind.STRIP_QUOTES, Buffer.OUTPUT)),
            ("Copy all", self.copy_output),
        ]
        for col, (title, handler) in enumerate(actions):
            button = QPushButton(title)
            button.clicked.connect(handler)
            grid.addWidget(button, 0, col)
        buttons.setLayout(grid)
        layout.addWidget(buttons)

        group.setLayout(layout)
        return group

    def create_clear_section(self) -> QWidget:
        widget = QWidget()
        grid = QGridLayout()
        clear_input = QPushButton("Clear input")
        clear_input.clicked.connect(lambda: self.run_task(self.session.clear_input))
        clear_output = QPushButton("Clear output")
        clear_output.clicked.connect(lambda: self.run_task(self.session.clear_output))
        grid.addWidget(clear_input, 0, 0)
        grid.addWidget(clear_output, 0, 1)
        widget.setLayout(grid)
        return widget

    def apply_styles(self):
        """Apply custom styles to the interface."""
        style = """
        QMainWindow {
            background-color: #f0f0f0;
        }
        QGroupBox {
            font-weight: bold;
            border: 2px solid #cccccc;
            border-radius: 5px;
            margin-top: 1ex;
            padding: 5px;
        }
        QPushButton {
            background-color: #e1e1e1;
            border: 1px solid #999999;
            border-radius: 3px;
            padding: 6px 12px;
        }
        QPushButton:hover {
            background-color: #d4d4d4;
        }
        """
        self.setStyleSheet(style)

    def run_task(self, task: Callable[[], PageView]):
        """Run a session call on a worker thread and render its result."""
        thread = SessionTaskThread(task)
        thread.view_ready.connect(self.show_view)
        thread.error_occurred.connect(self.on_error)
        thread.finished.connect(lambda: self.threads.remove(thread))
        self.threads.append(thread)
        thread.start()

    def transform(self, kind: TransformKind, buffer: Optional[Buffer] = None):
        # Widgets may only be read on the UI thread, so take the draft here
        draft = self.input_edit.toPlainText()
        self.run_task(lambda: self.session.run_transform(kind, draft=draft, buffer=buffer))

    def paste_input(self):
        clip_text = QApplication.clipboard().text()
        self.run_task(lambda: self.session.set_input(clip_text))

    def copy_output(self):
        QApplication.clipboard().setText(self.session.current_output_blob())
        QMessageBox.information(self, "Copied", "The full output was copied to the clipboard.")

    def show_view(self, view: PageView):
        """Render a PageView into the matching text box and label."""
        if view.revision < self.shown_revision[view.buffer]:
            log_message(f"Dropping stale {view.buffer.value} view (revision {view.revision})", level="DEBUG")
            return
        self.shown_revision[view.buffer] = view.revision
        if view.buffer is Buffer.INPUT:
            self.input_edit.setPlainText(view.text)
            self.input_page_label.setText(view.label)
        else:
            self.output_edit.setPlainText(view.text)
            self.output_page_label.setText(view.label)

    def on_error(self, error_message: str):
        QMessageBox.critical(self, "Error", error_message)

    def closeEvent(self, event):
        for thread in list(self.threads):
            thread.wait()
        log_message("Application closing")
        event.accept()


def main():
    """Main application entry point."""
    settings = load_data_file()
    set_log_file(settings.log_file)

    app = QApplication(sys.argv)
    app.setApplicationName("Opkit")
    app.setOrganizationName("Opkit")

    try:
        session = Session(settings)
    except OpkitError as e:
        log_message(f"Invalid configuration: {e}", level="ERROR")
        QMessageBox.critical(None, "Configuration Error", str(e))
        sys.exit(1)

    window = OpkitMainWindow(session)
    window.show()

    log_message("Opkit PyQt5 application started")
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
