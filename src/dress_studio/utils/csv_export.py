"""CSV rendering for report exports."""

from __future__ import annotations

import csv
import io
from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from dress_studio.paths import get_exports_dir


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def render_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """Render rows as CSV text.

    The header comes from the first row's keys and is written bare; every
    data field is quoted, with ``None`` rendered as an empty string. Lines
    are separated by ``\\n`` with no trailing newline.
    """
    if not rows:
        return ""
    headers = list(rows[0].keys())
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for row in rows:
        writer.writerow([_cell(row.get(header)) for header in headers])
    body = buffer.getvalue()
    if body.endswith("\n"):
        body = body[:-1]
    return "\n".join([",".join(headers), body])


def write_export(kind: str, content: str, exports_dir: Optional[Path] = None) -> Path:
    """Save an export under the exports directory and return its path."""
    exports_dir = exports_dir or get_exports_dir()
    exports_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = exports_dir / f"{kind}_{timestamp}.csv"
    with filepath.open("w", encoding="utf-8-sig", newline="") as file:
        file.write(content)
    return filepath
