from __future__ import annotations

from io import BytesIO
import re

from reportlab.lib import colors, enums
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import (
    ListFlowable,
    ListItem,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

_ORDERED_RE = re.compile(r"^(\d+)[.)]\s+(.*)$")
_TABLE_SEP_RE = re.compile(r"^\|?\s*:?-{3,}:?\s*(\|\s*:?-{3,}:?\s*)*\|?$")
_HR_RE = re.compile(r"^(-{3,}|\*{3,}|_{3,})$")


def _esc(s: str) -> str:
    # ReportLab Paragraph markup is XML-ish
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def md_inline_to_rl(s: str) -> str:
    """
    Convert bold, italic and inline code to ReportLab tags.
    Code spans are pulled out first so * inside them is left alone.
    """
    s = _esc(s)

    code_spans: list[str] = []

    def _code_repl(match):
        code_spans.append(match.group(1))
        return f"@@CODE{len(code_spans) - 1}@@"

    s = re.sub(r"`([^`]+)`", _code_repl, s)
    s = re.sub(r"\*\*([^*]+)\*\*", r"<b>\1</b>", s)
    s = re.sub(r"__([^_]+)__", r"<b>\1</b>", s)
    s = re.sub(r"(?<!\*)\*([^*]+)\*(?!\*)", r"<i>\1</i>", s)

    for i, code in enumerate(code_spans):
        s = s.replace(f"@@CODE{i}@@", f'<font face="Courier">{code}</font>')

    return s


def _para(text: str, style: ParagraphStyle) -> Paragraph:
    """Fall back to plain escaped text when the converted markup does not parse."""
    try:
        return Paragraph(md_inline_to_rl(text), style)
    except ValueError:
        return Paragraph(_esc(text), style)


def _split_row(line: str) -> list[str]:
    line = line.strip()
    if line.startswith("|"):
        line = line[1:]
    if line.endswith("|"):
        line = line[:-1]
    return [cell.strip() for cell in line.split("|")]


def markdown_to_pdf_bytes(md: str, *, title: str = "Perencanaan Pembelajaran Mendalam") -> bytes:
    """
    Render the Markdown subset Gemini uses for lesson plans to PDF bytes:
      - headings (# to ######)
      - bullets ("- ", "* ", "+ ") and numbered items ("1. ", "1) ")
      - pipe tables with a separator row
      - paragraphs, horizontal rules
    """
    md = (md or "").strip()

    styles = getSampleStyleSheet()
    headings = {
        1: ParagraphStyle("H1", parent=styles["Heading1"], spaceAfter=12),
        2: ParagraphStyle("H2", parent=styles["Heading2"], spaceAfter=10),
        3: ParagraphStyle("H3", parent=styles["Heading3"], spaceAfter=8),
        4: ParagraphStyle("H4", parent=styles["Heading3"], fontSize=11, spaceAfter=6),
        5: ParagraphStyle("H5", parent=styles["Heading3"], fontSize=10, spaceAfter=5),
        6: ParagraphStyle("H6", parent=styles["Heading3"], fontSize=9, spaceAfter=4),
    }
    body = ParagraphStyle(
        "Body",
        parent=styles["BodyText"],
        leading=14,
        alignment=enums.TA_JUSTIFY,
    )
    cell = ParagraphStyle("Cell", parent=styles["BodyText"], fontSize=9, leading=11)

    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=2 * cm,
        rightMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
        title=title,
    )

    story = []
    pending_items: list[str] = []
    pending_kind = "bullet"
    pending_rows: list[list[str]] = []

    def flush_items() -> None:
        nonlocal pending_items
        if not pending_items:
            return
        story.append(
            ListFlowable(
                [ListItem(_para(item, body)) for item in pending_items],
                bulletType="1" if pending_kind == "number" else "bullet",
                leftIndent=18,
            )
        )
        story.append(Spacer(1, 8))
        pending_items = []

    def flush_table() -> None:
        nonlocal pending_rows
        if not pending_rows:
            return
        width = max(len(r) for r in pending_rows)
        data = [
            [_para(c, cell) for c in r + [""] * (width - len(r))]
            for r in pending_rows
        ]
        table = Table(data, repeatRows=1, colWidths=[doc.width / width] * width)
        table.setStyle(
            TableStyle(
                [
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#DDDDDD")),
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#F2F2F2")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ]
            )
        )
        story.append(table)
        story.append(Spacer(1, 10))
        pending_rows = []

    for raw in md.splitlines():
        line = raw.strip()
        line = line.replace("• ", "- ").replace("– ", "- ")

        if line.startswith("|"):
            flush_items()
            if not _TABLE_SEP_RE.match(line):
                pending_rows.append(_split_row(line))
            continue
        flush_table()

        if not line:
            flush_items()
            story.append(Spacer(1, 10))
            continue

        if _HR_RE.match(line):
            flush_items()
            story.append(Spacer(1, 14))
            continue

        if line.startswith(("- ", "* ", "+ ")):
            if pending_kind != "bullet":
                flush_items()
            pending_kind = "bullet"
            pending_items.append(line[2:].strip())
            continue

        m = _ORDERED_RE.match(line)
        if m:
            if pending_kind != "number":
                flush_items()
            pending_kind = "number"
            pending_items.append(m.group(2))
            continue

        flush_items()

        level = len(line) - len(line.lstrip("#"))
        if 1 <= level <= 6 and line[level:level + 1] == " ":
            story.append(_para(line[level + 1:].strip(), headings[level]))
            continue

        story.append(_para(line, body))

    flush_items()
    flush_table()
    if not story:
        story.append(Spacer(1, 1))
    doc.build(story)
    return buf.getvalue()
