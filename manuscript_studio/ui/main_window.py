"""Qt GUI for Manuscript Studio."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QSplitter,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from ..academic import StyleKind, default_style, generate_title_page
from ..importer import SUPPORTED_SUFFIXES
from ..workspace import ERROR, INFO, ChapterWorkspace, WorkspaceMessage
from .resources import app_icon

FILE_FILTER = "Manuscripts (*.tex *.ltx *.latex *.txt *.epub *.pdf);;All files (*)"


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, workspace: Optional[ChapterWorkspace] = None) -> None:
        super().__init__()
        self.setAcceptDrops(True)
        self.workspace = workspace or ChapterWorkspace()
        self._syncing = False
        self._build_ui()
        self.setWindowIcon(app_icon())
        self._configure_widgets()
        self._refresh_chapters()

    # ----- UI setup -----
    def _build_ui(self) -> None:
        self.setWindowTitle("Manuscript Studio")
        central = QWidget(self)
        self.setCentralWidget(central)
        root_layout = QHBoxLayout(central)
        splitter = QSplitter(Qt.Orientation.Horizontal, central)
        root_layout.addWidget(splitter)

        sidebar = QWidget(splitter)
        sidebar_layout = QVBoxLayout(sidebar)
        self.chapterList = QListWidget(sidebar)
        self.chapterList.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.chapterList.setDragDropMode(QAbstractItemView.DragDropMode.InternalMove)
        self.chapterList.setDefaultDropAction(Qt.DropAction.MoveAction)
        sidebar_layout.addWidget(self.chapterList)
        chapter_buttons = QHBoxLayout()
        self.addChapterButton = QPushButton("Add", sidebar)
        self.deleteChapterButton = QPushButton("Delete", sidebar)
        self.importButton = QPushButton("Import…", sidebar)
        chapter_buttons.addWidget(self.addChapterButton)
        chapter_buttons.addWidget(self.deleteChapterButton)
        chapter_buttons.addWidget(self.importButton)
        sidebar_layout.addLayout(chapter_buttons)

        editor = QWidget(splitter)
        editor_layout = QVBoxLayout(editor)
        self.titleEdit = QLineEdit(editor)
        self.titleEdit.setPlaceholderText("Chapter title")
        editor_layout.addWidget(self.titleEdit)
        self.contentEdit = QPlainTextEdit(editor)
        self.contentEdit.setPlaceholderText("Paste or import your manuscript…")
        editor_layout.addWidget(self.contentEdit, 1)

        actions = QHBoxLayout()
        self.styleCombo = QComboBox(editor)
        for kind in StyleKind:
            self.styleCombo.addItem(kind.label, kind)
        actions.addWidget(self.styleCombo)
        self.formatButton = QPushButton("Format", editor)
        self.paragraphButton = QPushButton("Paragraph Breaks", editor)
        self.auditButton = QPushButton("Check Formatting", editor)
        self.titlePageButton = QPushButton("Title Page", editor)
        for button in (self.formatButton, self.paragraphButton, self.auditButton, self.titlePageButton):
            actions.addWidget(button)
        actions.addStretch(1)
        self.countsLabel = QLabel(editor)
        actions.addWidget(self.countsLabel)
        editor_layout.addLayout(actions)

        self.issueList = QListWidget(editor)
        self.issueList.setMaximumHeight(140)
        editor_layout.addWidget(self.issueList)

        splitter.setStretchFactor(1, 3)
        self.statusbar = QStatusBar(self)
        self.setStatusBar(self.statusbar)
        self.resize(1100, 720)

    def _configure_widgets(self) -> None:
        self.styleCombo.setCurrentIndex(self.styleCombo.findData(default_style()))
        self.chapterList.currentItemChanged.connect(self._on_chapter_selected)
        self.chapterList.model().rowsMoved.connect(self._sync_chapter_order)
        self.addChapterButton.clicked.connect(self._add_chapter)
        self.deleteChapterButton.clicked.connect(self._delete_chapter)
        self.importButton.clicked.connect(self._import_dialog)
        self.titleEdit.textEdited.connect(self._on_title_edited)
        self.contentEdit.textChanged.connect(self._on_content_changed)
        self.formatButton.clicked.connect(self._format_active)
        self.paragraphButton.clicked.connect(self._suggest_breaks)
        self.auditButton.clicked.connect(self._audit_active)
        self.titlePageButton.clicked.connect(self._insert_title_page)

    # ----- Chapter management -----
    def _current_style(self) -> StyleKind:
        return StyleKind.parse(self.styleCombo.currentData())

    def _refresh_chapters(self) -> None:
        self._syncing = True
        self.chapterList.clear()
        for chapter in self.workspace.chapters:
            item = QListWidgetItem(chapter.title or "Untitled")
            item.setData(Qt.UserRole, chapter.id)
            self.chapterList.addItem(item)
            if chapter.id == self.workspace.active_id:
                self.chapterList.setCurrentItem(item)
        self._syncing = False
        self._load_active()

    def _load_active(self) -> None:
        chapter = self.workspace.active
        self._syncing = True
        self.titleEdit.setText(chapter.title)
        self.contentEdit.setPlainText(chapter.content)
        self._syncing = False
        self.issueList.clear()
        self._update_counts()

    def _update_counts(self) -> None:
        stats = self.workspace.stats()
        self.countsLabel.setText(f"{stats.words} words · {stats.characters} characters")

    def _show_message(self, message: Optional[WorkspaceMessage]) -> None:
        if message is None:
            return
        if message.kind == ERROR:
            QMessageBox.critical(self, "Manuscript Studio", message.text)
        elif message.kind == INFO:
            self.statusbar.showMessage(message.text, 4000)
        else:
            QMessageBox.warning(self, "Manuscript Studio", message.text)

    @Slot(QListWidgetItem, QListWidgetItem)
    def _on_chapter_selected(self, current: Optional[QListWidgetItem], _previous) -> None:
        if self._syncing or current is None:
            return
        self._show_message(self.workspace.select(current.data(Qt.UserRole)))
        self._load_active()

    def _add_chapter(self) -> None:
        self.workspace.add_chapter()
        self._refresh_chapters()

    def _delete_chapter(self) -> None:
        message = self.workspace.delete_chapter(self.workspace.active_id)
        self._show_message(message)
        if message is None:
            self._refresh_chapters()

    def _on_title_edited(self, text: str) -> None:
        self.workspace.update_chapter(self.workspace.active_id, title=text)
        item = self.chapterList.currentItem()
        if item is not None:
            item.setText(text or "Untitled")

    def _on_content_changed(self) -> None:
        if self._syncing:
            return
        self.workspace.update_chapter(self.workspace.active_id, content=self.contentEdit.toPlainText())
        self._update_counts()

    def _sync_chapter_order(self, *_args) -> None:
        ordered = []
        for index in range(self.chapterList.count()):
            chapter = self.workspace.find(self.chapterList.item(index).data(Qt.UserRole))
            if chapter is not None:
                ordered.append(chapter)
        self.workspace.chapters = ordered

    # ----- Import -----
    def _import_dialog(self) -> None:
        paths, _ = QFileDialog.getOpenFileNames(self, "Import manuscripts", str(Path.home()), FILE_FILTER)
        if paths:
            self._import_paths([Path(path) for path in paths])

    def _import_paths(self, paths: List[Path]) -> None:
        try:
            message = self.workspace.import_files(paths)
        except Exception as exc:
            QMessageBox.critical(self, "Failed to import", str(exc))
            return
        self._show_message(message)
        self._refresh_chapters()

    # ----- Formatting -----
    def _format_active(self) -> None:
        self._show_message(self.workspace.format_chapter(self.workspace.active_id, self._current_style()))
        self._load_active()

    def _suggest_breaks(self) -> None:
        self._show_message(self.workspace.format_chapter(self.workspace.active_id, None))
        self._load_active()

    def _audit_active(self) -> None:
        self.issueList.clear()
        style = self._current_style()
        issues = self.workspace.audit_chapter(self.workspace.active_id, style)
        if not issues:
            self.statusbar.showMessage(f"No {style.label} formatting issues found", 4000)
            return
        for issue in issues:
            item = QListWidgetItem(issue.description)
            if issue.suggested_fix:
                item.setToolTip(issue.suggested_fix)
            self.issueList.addItem(item)
        self.statusbar.showMessage(f"{len(issues)} formatting issues", 4000)

    def _insert_title_page(self) -> None:
        chapter = self.workspace.active
        page = generate_title_page(chapter.title, "[Author]", "[Institution]", self._current_style())
        self.contentEdit.setPlainText(page + "\n\n" + chapter.clean_content)

    # ----- Drag and drop -----
    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if event.mimeData().hasUrls():
            event.acceptProposedAction()
        else:
            super().dragEnterEvent(event)

    def dropEvent(self, event) -> None:  # type: ignore[override]
        paths = []
        if event.mimeData().hasUrls():
            for url in event.mimeData().urls():
                local_path = url.toLocalFile()
                if local_path and Path(local_path).suffix.lower() in SUPPORTED_SUFFIXES:
                    paths.append(Path(local_path))
        if paths:
            self._import_paths(paths)
            event.acceptProposedAction()
        else:
            super().dropEvent(event)


__all__ = ["MainWindow"]
