"""Qt window hosting the repository selector."""

from __future__ import annotations

import asyncio
import logging as py_logging

from repopicker.errors import ExitCode, RepoPickerError
from repopicker.selection.controller import RepositorySelectController
from repopicker.selection.resolver import load_status
from repopicker.selection.status import Status
from repopicker.ui.selector import render_status

logger = py_logging.getLogger(__name__)


def launch_selector(controller: RepositorySelectController) -> int:  # pragma: no cover
    try:
        from PySide6.QtCore import QObject, QThread, Signal, Slot
        from PySide6.QtWidgets import (
            QApplication,
            QComboBox,
            QLabel,
            QMainWindow,
            QVBoxLayout,
            QWidget,
        )
    except ImportError as exc:
        raise RepoPickerError(
            "PySide6 is not installed; the selector window cannot open.",
            code=ExitCode.RUNTIME_ERROR,
            hint="Run `pip install repopicker[gui]` or use --list / --select.",
        ) from exc

    class StatusWorker(QObject):
        resolved = Signal(object)
        finished = Signal()

        @Slot()
        def run(self) -> None:
            try:
                status = asyncio.run(load_status(controller.registry, controller.store))
                self.resolved.emit(status)
            finally:
                self.finished.emit()

    class SelectorWindow(QMainWindow):
        def __init__(self) -> None:
            super().__init__()
            self.setWindowTitle("Repository")
            self._syncing = False

            central = QWidget(self)
            layout = QVBoxLayout(central)
            self.label = QLabel()
            self.combo = QComboBox()
            self.combo.setMinimumContentsLength(30)
            layout.addWidget(self.label)
            layout.addWidget(self.combo)
            layout.addStretch(1)
            self.setCentralWidget(central)

            self.combo.currentTextChanged.connect(self._on_text_changed)
            self.refresh()

        def refresh(self) -> None:
            view = render_status(controller.status)
            self._syncing = True
            try:
                self.combo.clear()
                self.combo.addItems(list(view.options))
                if view.selected is not None:
                    self.combo.setCurrentText(view.selected)
            finally:
                self._syncing = False
            self.label.setText(view.error or view.label)
            if view.error:
                self.label.setStyleSheet("font-weight: bold; color: red;")
            self.combo.setVisible(not view.error)
            self.combo.setEnabled(view.enabled)

        @Slot(object)
        def apply(self, status: Status) -> None:
            controller.apply_status(status)
            self.refresh()

        def _on_text_changed(self, token: str) -> None:
            if self._syncing or not token:
                return
            controller.select_token(token)

    app = QApplication.instance() or QApplication([])
    window = SelectorWindow()
    thread = QThread()
    worker = StatusWorker()
    worker.moveToThread(thread)
    thread.started.connect(worker.run)
    worker.resolved.connect(window.apply)
    worker.finished.connect(thread.quit)
    window.show()
    thread.start()
    logger.debug("Selector window started")
    exit_code = app.exec()
    thread.wait()
    return int(exit_code)
