from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

import markdown

DOC_MIME = "application/msword"

DOC_TITLE = "Perencanaan Pembelajaran Mendalam"

DOC_STYLE = """\
body { font-family: 'Arial', sans-serif; line-height: 1.6; margin: 20px; color: #333; }
h1, h2, h3, h4, h5, h6 { color: #2C3E50; margin-top: 1em; margin-bottom: 0.5em; }
h1 { font-size: 2.2em; border-bottom: 2px solid #3498DB; padding-bottom: 0.3em; }
h2 { font-size: 1.8em; color: #3498DB; }
h3 { font-size: 1.4em; color: #2ECC71; }
p { margin-bottom: 1em; }
ul, ol { margin-bottom: 1em; margin-left: 20px; }
li { margin-bottom: 0.5em; }
strong { font-weight: bold; }
em { font-style: italic; }
table { width: 100%; border-collapse: collapse; margin-bottom: 1em; }
th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }
th { background-color: #f2f2f2; }
"""


@dataclass(frozen=True)
class DocExport:
    file_name: str
    data: bytes
    mime: str = DOC_MIME


def safe_filename(name: str, default: str = "dokumen") -> str:
    name = (name or "").strip()
    if not name:
        return default

    # whitespace -> underscore
    name = re.sub(r"\s+", "_", name)

    # keep letters, digits, dash, underscore and dot
    name = re.sub(r"[^A-Za-z0-9._-]", "", name)

    return name or default


def export_filename(author: str, day: date | None = None) -> str:
    day = day or date.today()
    return f"PPM_{safe_filename(author, 'Guru')}_{day.isoformat()}.doc"


def markdown_to_doc_html(md: str, *, title: str = DOC_TITLE) -> str:
    """
    Convert Markdown to a standalone HTML page that Word opens as a document.
    """
    body = markdown.markdown(md or "", extensions=["tables", "sane_lists"])
    return f"""<!DOCTYPE html>
<html lang="id">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{title}</title>
<style>
{DOC_STYLE}</style>
</head>
<body>
{body}
</body>
</html>
"""


def build_doc_export(md: str, *, author: str, day: date | None = None) -> DocExport | None:
    """Returns None when there is nothing to export."""
    if not (md or "").strip():
        return None
    html_doc = markdown_to_doc_html(md)
    return DocExport(file_name=export_filename(author, day), data=html_doc.encode("utf-8"))
