"""Export helpers for CSV and PDF."""
from __future__ import annotations

import csv
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence

from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import QColor, QFont, QPageLayout, QPageSize, QPainter, QPen, QPdfWriter

from . import config
from .layout import GanttLayout, render_gantt
from .models import Task, ViewMode
from .timeline import resolve_task_range

CSV_HEADERS = ["Task", "Start", "End"]
CSV_ACTIVE_MARKER = "X"

PDF_TASK_COLUMN_WIDTH = 600
PDF_PAGE_MARGIN_RATIO = 0.04
PDF_HEADER_HEIGHT = 120
PDF_ROW_HEIGHT_MIN = 60
PDF_ROW_HEIGHT_MAX = 140
PDF_BAR_INSET_RATIO = 0.2
PDF_FONT_SIZE = 8
PDF_GRID_COLOR = QColor("#e5e7eb")
PDF_TODAY_COLOR = QColor("#f87171")


def export_as_csv(
    path: Path | str,
    tasks: Sequence[Task],
    view_mode: ViewMode = ViewMode.DAY,
    today: Optional[date] = None,
) -> None:
    """Export one row per task with a marker column per timeline day."""
    csv_path = Path(path)
    csv_path.parent.mkdir(parents=True, exist_ok=True)

    timeline = render_gantt(tasks, view_mode, today).timeline
    header = CSV_HEADERS + [day.isoformat() for day in timeline.dates]
    with csv_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(header)
        for task in tasks:
            start, end = resolve_task_range(task, today)
            row = [task.title, _format(start), _format(end)]
            markers = []
            for day in timeline.dates:
                if start is not None and end is not None and start <= day <= end:
                    markers.append(CSV_ACTIVE_MARKER)
                else:
                    markers.append("")
            writer.writerow(row + markers)


def export_as_pdf(
    path: Path | str,
    tasks: Sequence[Task],
    view_mode: ViewMode = ViewMode.DAY,
    today: Optional[date] = None,
) -> None:
    """Render the chart onto a landscape A4 page."""
    pdf_path = Path(path)
    pdf_path.parent.mkdir(parents=True, exist_ok=True)

    writer = QPdfWriter(str(pdf_path))
    writer.setPageSize(QPageSize(QPageSize.PageSizeId.A4))
    writer.setPageOrientation(QPageLayout.Orientation.Landscape)
    writer.setResolution(300)

    task_list = list(tasks)
    painter = QPainter(writer)
    _draw_pdf_chart(painter, writer, task_list, render_gantt(task_list, view_mode, today))
    painter.end()


def _format(value: Optional[date]) -> str:
    return "" if value is None else value.isoformat()


def _compute_row_height(content_rect, tasks: List[Task]) -> int:
    """Compute a bounded row height so all tasks fit on the page."""
    rows = max(1, len(tasks))
    available_height = max(PDF_ROW_HEIGHT_MIN, content_rect.height() - PDF_HEADER_HEIGHT)
    return max(PDF_ROW_HEIGHT_MIN, min(PDF_ROW_HEIGHT_MAX, int(available_height / rows)))


def _draw_pdf_chart(painter: QPainter, writer: QPdfWriter, tasks: List[Task], layout: GanttLayout) -> None:
    page_rect = writer.pageLayout().paintRectPixels(writer.resolution())
    margin = int(page_rect.width() * PDF_PAGE_MARGIN_RATIO)
    content_rect = page_rect.adjusted(margin, margin, -margin, -margin)

    font = QFont(painter.font())
    font.setPointSize(PDF_FONT_SIZE)
    painter.setFont(font)
    pen = QPen(QColor("#333333"))
    pen.setWidth(1)
    painter.setPen(pen)

    timeline_left = content_rect.left() + PDF_TASK_COLUMN_WIDTH
    timeline_width = max(1, content_rect.right() - timeline_left)
    scale = timeline_width / max(1, layout.grid.width)
    row_height = _compute_row_height(content_rect, tasks)
    top = content_rect.top()
    body_top = top + PDF_HEADER_HEIGHT
    body_bottom = body_top + row_height * max(1, len(tasks))

    corner = QRectF(content_rect.left(), top, PDF_TASK_COLUMN_WIDTH, PDF_HEADER_HEIGHT)
    painter.fillRect(corner, QColor("#eceff1"))
    painter.drawRect(corner)
    painter.drawText(corner, Qt.AlignmentFlag.AlignCenter, "Task")

    for cell in layout.grid.cells:
        left = timeline_left + cell.left * scale
        width = min(cell.width * scale, timeline_left + timeline_width - left)
        if width <= 0:
            continue
        rect = QRectF(left, top, width, PDF_HEADER_HEIGHT)
        painter.fillRect(rect, QColor("#e8eaf6"))
        painter.drawRect(rect)
        text = f"{cell.label}\n{cell.sub_label}" if cell.sub_label else cell.label
        painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, text)

    painter.save()
    painter.setPen(QPen(PDF_GRID_COLOR))
    for line in layout.grid.lines:
        x = timeline_left + line * scale
        painter.drawLine(int(x), int(body_top), int(x), int(body_bottom))
    painter.restore()

    current_y = body_top
    for task, bar in zip(tasks, layout.bars):
        name_rect = QRectF(content_rect.left(), current_y, PDF_TASK_COLUMN_WIDTH, row_height)
        painter.drawRect(name_rect)
        painter.drawText(
            name_rect.adjusted(12, 0, -12, 0),
            Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft,
            task.title,
        )
        inset = row_height * PDF_BAR_INSET_RATIO
        bar_rect = QRectF(
            timeline_left + bar.left * scale,
            current_y + inset,
            bar.width * scale,
            row_height - 2 * inset,
        )
        color = QColor(config.status_color(task.status))
        painter.fillRect(bar_rect, color)
        current_y += row_height

    if layout.today_marker.visible:
        painter.save()
        today_pen = QPen(PDF_TODAY_COLOR)
        today_pen.setWidth(4)
        painter.setPen(today_pen)
        x = timeline_left + layout.today_marker.left * scale
        painter.drawLine(int(x), int(body_top), int(x), int(body_bottom))
        painter.restore()

    if not tasks:
        rect = QRectF(content_rect.left(), body_top, content_rect.width(), row_height)
        painter.drawRect(rect)
        painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, "No tasks defined")
