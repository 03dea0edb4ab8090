"""Main PyQt application entry point."""
from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from PyQt6.QtCore import QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QAction, QBrush, QColor, QKeySequence, QMouseEvent, QPainter, QPaintEvent, QPen
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QButtonGroup,
    QFileDialog,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from . import config
from .exporters import export_as_csv, export_as_pdf
from .geometry import bar_caption
from .layout import GanttLayout, render_gantt
from .models import DEFAULT_COLUMNS, StatusColumn, Task, ViewMode, effective_date_range
from .state import Action, GanttState, SelectTask, SetViewMode, reduce
from .storage import load_project, save_project

logger = logging.getLogger(__name__)

HEADER_HEIGHT = 60
ROW_HEIGHT = 48
BAR_HEIGHT = 28
TASK_LIST_WIDTH = 320
_TODAY_COLOR = QColor("#f87171")
_GRID_COLOR = QColor("#e5e7eb")
_WEEKEND_COLOR = QColor("#f87171")


class GanttCanvas(QWidget):
    """Paints the timeline header, grid lines, task bars and today line."""

    bar_clicked = pyqtSignal(str)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.layout_data: Optional[GanttLayout] = None
        self.tasks: List[Task] = []
        self.selected_task_id: Optional[str] = None

    def set_layout(self, layout: GanttLayout, tasks: Sequence[Task], selected_task_id: Optional[str]) -> None:
        self.layout_data = layout
        self.tasks = list(tasks)
        self.selected_task_id = selected_task_id
        height = HEADER_HEIGHT + ROW_HEIGHT * max(1, len(self.tasks))
        self.setFixedSize(int(layout.grid.width), height)
        self.update()

    def bar_rect(self, row: int) -> QRectF:
        bar = self.layout_data.bars[row]
        top = HEADER_HEIGHT + row * ROW_HEIGHT + (ROW_HEIGHT - BAR_HEIGHT) / 2
        return QRectF(bar.left, top, bar.width, BAR_HEIGHT)

    def paintEvent(self, event: QPaintEvent) -> None:  # pragma: no cover - requires UI
        if self.layout_data is None:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(self.rect(), QColor("white"))
        self._paint_header(painter)
        self._paint_grid(painter)
        self._paint_bars(painter)
        self._paint_today(painter)
        painter.end()

    def _paint_header(self, painter: QPainter) -> None:
        painter.fillRect(QRectF(0, 0, self.width(), HEADER_HEIGHT), QColor("#f9fafb"))
        for cell in self.layout_data.grid.cells:
            rect = QRectF(cell.left, 0, cell.width, HEADER_HEIGHT)
            painter.setPen(QPen(_GRID_COLOR))
            painter.drawRect(rect)
            painter.setPen(QPen(_WEEKEND_COLOR if cell.weekend else QColor("#374151")))
            text = f"{cell.label}\n{cell.sub_label}" if cell.sub_label else cell.label
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, text)

    def _paint_grid(self, painter: QPainter) -> None:
        painter.setPen(QPen(_GRID_COLOR))
        for line in self.layout_data.grid.lines:
            painter.drawLine(int(line), HEADER_HEIGHT, int(line), self.height())

    def _paint_bars(self, painter: QPainter) -> None:
        for row, task in enumerate(self.tasks):
            rect = self.bar_rect(row)
            color = QColor(config.status_color(task.status))
            if task.id == self.selected_task_id:
                color = color.darker(120)
            painter.setPen(QPen(color.darker(110)))
            painter.setBrush(QBrush(color))
            painter.drawRoundedRect(rect, 6, 6)
            caption = bar_caption(task, rect.width())
            if caption:
                painter.setPen(QPen(QColor("white")))
                painter.drawText(
                    rect.adjusted(8, 0, -8, 0),
                    Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft,
                    caption,
                )

    def _paint_today(self, painter: QPainter) -> None:
        marker = self.layout_data.today_marker
        if not marker.visible:
            return
        pen = QPen(_TODAY_COLOR)
        pen.setWidth(2)
        painter.setPen(pen)
        painter.drawLine(int(marker.left), 0, int(marker.left), self.height())
        painter.drawText(int(marker.left) + 4, 12, "TODAY")

    def task_at(self, x: float, y: float) -> Optional[str]:
        """Return the id of the task whose bar contains the point."""
        if self.layout_data is None or y < HEADER_HEIGHT:
            return None
        row = int((y - HEADER_HEIGHT) // ROW_HEIGHT)
        if row >= len(self.tasks):
            return None
        if self.bar_rect(row).contains(x, y):
            return self.tasks[row].id
        return None

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            task_id = self.task_at(event.position().x(), event.position().y())
            if task_id is not None:
                self.bar_clicked.emit(task_id)
        super().mousePressEvent(event)


class GanttChartWidget(QWidget):
    """Task list beside the painted timeline, with zoom buttons on top.

    All UI state lives in an immutable ``GanttState``; every change goes
    through :meth:`dispatch` and triggers a fresh render pass.
    """

    task_clicked = pyqtSignal(str)

    def __init__(self, parent: Optional[QWidget] = None, today: Optional[date] = None) -> None:
        super().__init__(parent)
        self.state = GanttState()
        self.tasks: List[Task] = []
        self.today = today
        self.layout_data: GanttLayout = render_gantt(self.tasks, self.state.view_mode, self._today())
        self.mode_buttons: Dict[ViewMode, QPushButton] = {}
        self.task_list = QTableWidget(0, 2)
        self.canvas = GanttCanvas()
        self.scroll = QScrollArea()
        self._build_layout()
        self.canvas.bar_clicked.connect(self._handle_task_activated)
        self.task_list.cellClicked.connect(self._handle_row_clicked)
        self._refresh()

    def _today(self) -> date:
        return self.today or date.today()

    def _build_layout(self) -> None:
        controls = QHBoxLayout()
        controls.addWidget(QLabel("Timeline"))
        controls.addStretch(1)
        group = QButtonGroup(self)
        group.setExclusive(True)
        for mode in ViewMode:
            button = QPushButton(config.VIEW_CONFIG[mode].label)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked, m=mode: self.dispatch(SetViewMode(m)))
            group.addButton(button)
            controls.addWidget(button)
            self.mode_buttons[mode] = button

        self.task_list.setHorizontalHeaderLabels(["Task", "Dates"])
        self.task_list.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.task_list.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.task_list.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.task_list.setVerticalScrollMode(QAbstractItemView.ScrollMode.ScrollPerPixel)
        self.task_list.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.task_list.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.task_list.verticalHeader().setVisible(False)
        self.task_list.verticalHeader().setDefaultSectionSize(ROW_HEIGHT)
        self.task_list.horizontalHeader().setFixedHeight(HEADER_HEIGHT)
        self.task_list.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        self.task_list.setFixedWidth(TASK_LIST_WIDTH)

        self.scroll.setWidget(self.canvas)
        self.scroll.setWidgetResizable(False)
        # Keep the task list rows level with their bars.
        self.scroll.verticalScrollBar().valueChanged.connect(self.task_list.verticalScrollBar().setValue)
        self.task_list.verticalScrollBar().valueChanged.connect(self.scroll.verticalScrollBar().setValue)

        body = QHBoxLayout()
        body.setSpacing(0)
        body.addWidget(self.task_list)
        body.addWidget(self.scroll, 1)

        layout = QVBoxLayout(self)
        layout.addLayout(controls)
        layout.addLayout(body, 1)

    def set_tasks(self, tasks: Sequence[Task]) -> None:
        self.tasks = list(tasks)
        self._refresh()

    def dispatch(self, action: Action) -> None:
        previous = self.state
        self.state = reduce(self.state, action)
        if self.state.view_mode != previous.view_mode:
            logger.debug("View mode changed to %s", self.state.view_mode.value)
        self._refresh()

    def _refresh(self) -> None:
        self.layout_data = render_gantt(self.tasks, self.state.view_mode, self._today())
        self.mode_buttons[self.state.view_mode].setChecked(True)
        self._fill_task_list()
        self.canvas.set_layout(self.layout_data, self.tasks, self.state.selected_task_id)

    def _fill_task_list(self) -> None:
        self.task_list.setRowCount(len(self.tasks))
        for row, task in enumerate(self.tasks):
            title = QTableWidgetItem(task.title)
            title.setData(Qt.ItemDataRole.UserRole, task.id)
            title.setForeground(QColor(config.PRIORITY_COLORS[task.priority]))
            title.setToolTip(f"{task.priority.value} priority, {task.status.title}")
            self.task_list.setItem(row, 0, title)
            self.task_list.setItem(row, 1, QTableWidgetItem(format_date_range(task)))
            if task.id == self.state.selected_task_id:
                self.task_list.selectRow(row)

    def _handle_row_clicked(self, row: int, _column: int) -> None:
        item = self.task_list.item(row, 0)
        if item is not None:
            self._handle_task_activated(item.data(Qt.ItemDataRole.UserRole))

    def _handle_task_activated(self, task_id: str) -> None:
        self.dispatch(SelectTask(task_id))
        self.task_clicked.emit(task_id)


def format_date_range(task: Task) -> str:
    """Short ``dd/mm - dd/mm`` summary used in the task list."""
    start, end = effective_date_range(task)
    parts = [f"{day:%d/%m}" for day in (start, end) if day is not None]
    return " - ".join(parts)


class MainWindow(QMainWindow):
    """Primary window with menus and the chart."""

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Team Gantt")
        self.current_path: Optional[Path] = None
        self.columns: List[StatusColumn] = list(DEFAULT_COLUMNS)
        self.chart = GanttChartWidget()
        self.chart.task_clicked.connect(self._show_task_message)
        self.setCentralWidget(self.chart)
        self._build_menu()
        self.resize(1200, 700)

    def _build_menu(self) -> None:
        """Create the File menu along with shortcuts."""
        file_menu = self.menuBar().addMenu("File")

        open_action = QAction("Open", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self.action_open)
        file_menu.addAction(open_action)

        save_action = QAction("Save", self)
        save_action.setShortcut(QKeySequence.StandardKey.Save)
        save_action.triggered.connect(self.action_save)
        file_menu.addAction(save_action)

        export_action = QAction("Export", self)
        export_action.triggered.connect(self.action_export)
        file_menu.addAction(export_action)

        file_menu.addSeparator()
        quit_action = QAction("Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

    # Menu actions ------------------------------------------------------
    def action_open(self) -> None:
        """Load a task snapshot into the chart."""
        path, _ = QFileDialog.getOpenFileName(self, "Open tasks", filter="CSV Files (*.csv)")
        if not path:
            return
        try:
            columns, tasks = load_project(path)
        except (OSError, ValueError) as exc:
            logger.exception("Failed to open %s", path)
            QMessageBox.critical(self, "Open failed", str(exc))
            return
        self.columns = columns
        self.chart.set_tasks(tasks)
        self.current_path = Path(path)
        self.statusBar().showMessage(f"Loaded {len(tasks)} tasks from {path}", 3000)

    def action_save(self) -> None:
        if not self.current_path:
            path, _ = QFileDialog.getSaveFileName(
                self,
                "Save tasks",
                filter="CSV Files (*.csv)",
                initialFilter="CSV Files (*.csv)",
            )
            if not path:
                return
            self.current_path = Path(path)
        save_project(self.current_path, self.columns, self.chart.tasks)
        self.statusBar().showMessage(f"Saved to {self.current_path}", 3000)

    def action_export(self) -> None:
        """Export the timeline as a marker CSV or a PDF chart."""
        path, selected_filter = QFileDialog.getSaveFileName(
            self,
            "Export timeline",
            filter="CSV Files (*.csv);;PDF Files (*.pdf)",
        )
        if not path:
            return
        view_mode = self.chart.state.view_mode
        if path.lower().endswith(".pdf") or "PDF" in selected_filter:
            export_as_pdf(path, self.chart.tasks, view_mode)
            self.statusBar().showMessage(f"Exported PDF to {path}", 3000)
        else:
            export_as_csv(path, self.chart.tasks, view_mode)
            self.statusBar().showMessage(f"Exported CSV to {path}", 3000)

    def _show_task_message(self, task_id: str) -> None:
        for task in self.chart.tasks:
            if task.id == task_id:
                span = format_date_range(task) if task.has_schedule() else "no dates"
                self.statusBar().showMessage(f"{task.title}: {task.status.title}, {span}", 5000)
                return


def run() -> None:
    """Entry point used by the ``team-gantt`` script."""
    config.configure_logging()
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    app.exec()


if __name__ == "__main__":
    run()
