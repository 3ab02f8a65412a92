from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QDragEnterEvent, QDropEvent, QFont, QKeySequence
from PySide6.QtWidgets import (
    QApplication,
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QSplitter,
    QTreeWidget,
    QTreeWidgetItem,
)

from core.app_version import get_app_version
from core.config import AppConfig, load_app_config
from core.logging import configure_logging, get_logger
from snss import SessionFile, decode_file, render, render_url_list

LOGGER = get_logger("app.main")

ROOT_ITEM_NAME = "SNSS"
COMMAND_INDEX_ROLE = Qt.ItemDataRole.UserRole + 1

ABOUT_TEXT = (
    "SNSS Reader {version}\n\n"
    "Viewer for Chromium SNSS session and tab files.\n\n"
    "Based on:\n"
    "  https://digitalinvestigation.wordpress.com/2012/09/03/"
    "chrome-session-and-tabs-files-and-the-puzzle-of-the-pickle/"
)


class MainWindow(QMainWindow):
    """Command tree on the left, rendered text of the selection on the right."""

    def __init__(self, base_dir: Path, app_config: Optional[AppConfig] = None) -> None:
        super().__init__()
        self.base_dir = base_dir
        self.app_config: AppConfig = app_config or load_app_config(base_dir)
        self.session: Optional[SessionFile] = None

        viewer = self.app_config.viewer
        self.setWindowTitle("SNSS Reader")
        self.resize(viewer.window_width, viewer.window_height)
        self.setAcceptDrops(True)

        self._setup_ui()
        self._setup_menus()

    # UI construction -----------------------------------------------------

    def _setup_ui(self) -> None:
        viewer = self.app_config.viewer

        self.tree = QTreeWidget()
        self.tree.setHeaderHidden(True)
        self.tree.itemSelectionChanged.connect(self._on_selection_changed)

        self.text_view = QPlainTextEdit()
        self.text_view.setReadOnly(True)
        self.text_view.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.text_view.setFont(QFont(viewer.font_family, viewer.font_point_size))

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.tree)
        splitter.addWidget(self.text_view)
        splitter.setStretchFactor(1, 3)
        self.setCentralWidget(splitter)

    def _setup_menus(self) -> None:
        file_menu = self.menuBar().addMenu("&File")

        open_action = QAction("&Open...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_open_clicked)
        file_menu.addAction(open_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = self.menuBar().addMenu("&Edit")

        copy_action = QAction("&Copy", self)
        copy_action.setShortcut(QKeySequence.StandardKey.Copy)
        copy_action.triggered.connect(self.text_view.copy)
        edit_menu.addAction(copy_action)

        select_all_action = QAction("Select &All", self)
        select_all_action.setShortcut(QKeySequence.StandardKey.SelectAll)
        select_all_action.triggered.connect(self.text_view.selectAll)
        edit_menu.addAction(select_all_action)

        help_menu = self.menuBar().addMenu("&Help")
        about_action = QAction("&About", self)
        about_action.triggered.connect(self._on_about_clicked)
        help_menu.addAction(about_action)

    # File handling -------------------------------------------------------

    def open_file(self, file_path: Path) -> bool:
        """Decode ``file_path`` and rebuild the command tree. Returns False if unreadable."""
        try:
            session = decode_file(file_path)
        except OSError as exc:
            LOGGER.error("Cannot open %s: %s", file_path, exc)
            QMessageBox.warning(self, "Open failed", f"Cannot open {file_path}:\n{exc}")
            return False

        self.session = session
        self._populate_tree()
        return True

    def _populate_tree(self) -> None:
        self.text_view.clear()
        self.tree.clear()

        root = QTreeWidgetItem([ROOT_ITEM_NAME])
        root.setData(0, COMMAND_INDEX_ROLE, -1)
        self.tree.addTopLevelItem(root)

        for index, command in enumerate(self.session.commands):
            child = QTreeWidgetItem([f"[{index}] Id: {command.id}"])
            child.setData(0, COMMAND_INDEX_ROLE, index)
            root.addChild(child)

        root.setExpanded(True)
        self.tree.setCurrentItem(root)

    def text_for_item(self, item: QTreeWidgetItem) -> str:
        if self.session is None:
            return ""
        index = item.data(0, COMMAND_INDEX_ROLE)
        if index is None or index < 0:
            text = render(self.session)
            if self.app_config.viewer.show_url_list and self.session.is_snss:
                text += "\n" + render_url_list(self.session)
            return text
        return render(self.session.commands[index])

    # Slots ---------------------------------------------------------------

    def _on_selection_changed(self) -> None:
        items = self.tree.selectedItems()
        if not items:
            return
        self.text_view.setPlainText(self.text_for_item(items[0]))

    def _on_open_clicked(self) -> None:
        file_name, _ = QFileDialog.getOpenFileName(self, "Open SNSS file")
        if file_name:
            self.open_file(Path(file_name))

    def _on_about_clicked(self) -> None:
        QMessageBox.about(self, "About", ABOUT_TEXT.format(version=get_app_version()))

    # Drag and drop -------------------------------------------------------

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event: QDropEvent) -> None:
        local_files = [url.toLocalFile() for url in event.mimeData().urls() if url.isLocalFile()]
        if not local_files:
            event.ignore()
            return
        event.acceptProposedAction()
        self.open_file(Path(local_files[0]))


def main() -> int:
    base_dir = Path(__file__).resolve().parents[2]
    app_config = load_app_config(base_dir)

    log_level = getattr(logging, app_config.logging.level.upper(), logging.INFO)
    configure_logging(
        app_config.logs_dir,
        level=log_level,
        max_bytes=app_config.logging.app_log_max_mb * 1024 * 1024,
        backup_count=app_config.logging.app_log_backup_count,
    )

    app = QApplication(sys.argv)
    window = MainWindow(base_dir, app_config)
    window.show()

    file_args = [arg for arg in sys.argv[1:] if not arg.startswith("-")]
    if file_args:
        window.open_file(Path(file_args[0]))

    return app.exec()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
