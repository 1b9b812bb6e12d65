"""Dependency table rendering for rustydeps.

The table is built from :class:`rich.text.Text` objects. Styles live in
spans beside the plain text, so column widths are measured on what the
terminal actually shows and emphasis never shifts the alignment.

Example output (the red field is the one that changed)::

    Name       Version   Latest
    left-pad   1.2.3     1.2.3
    serde      1.0.0     2.0.0
"""

from __future__ import annotations

from typing import List, Optional

from rich.text import Text

from rustydeps.models import DependencySet, Severity, Version
from rustydeps.constants import (
    COLUMN_PADDING,
    EMPHASIS_STYLE,
    HEADER_STYLE,
    LATEST_HEADER,
    NAME_HEADER,
    VERSION_HEADER,
)


def render_version(version: Version, severity: Optional[Severity]) -> Text:
    """Render a version, emphasizing the field named by ``severity``.

    Args:
        version: Version to render.
        severity: Field to emphasize; ``UNCHANGED`` or ``None`` emphasizes
            nothing.

    Returns:
        Styled text such as ``1.[bold red]4[/].2-beta``.
    """
    text = Text()
    for segment_severity, separator, value in version.segments():
        text.append(separator)
        text.append(value, style=EMPHASIS_STYLE if segment_severity is severity else None)
    return text


def _cell(text: Text, width: int) -> Text:
    """Left-align ``text`` in a column of ``width`` visible cells."""
    cell = text.copy()
    cell.pad_right(width - cell.cell_len)
    return cell


def render_table(dependencies: DependencySet) -> Text:
    """Render resolved dependencies as an aligned ``Name Version Latest`` table.

    Args:
        dependencies: Fully resolved dependencies, rendered in set order.

    Returns:
        Multi-line styled text: a bold header row followed by one row per
        dependency.

    Raises:
        ValueError: A dependency has not been resolved yet.
    """
    rows: List[List[Text]] = []
    for dependency in dependencies:
        if dependency.latest_version is None or dependency.severity is None:
            raise ValueError(f"Dependency '{dependency.name}' has not been resolved")

        rows.append(
            [
                Text(dependency.name),
                render_version(dependency.declared_version, dependency.severity),
                render_version(dependency.latest_version, dependency.severity),
            ]
        )

    header = [Text(title, style=HEADER_STYLE) for title in (NAME_HEADER, VERSION_HEADER, LATEST_HEADER)]

    # Last column is never padded
    widths = [
        max(cells[column].cell_len for cells in [header, *rows]) + COLUMN_PADDING
        for column in range(2)
    ]

    lines = []
    for cells in [header, *rows]:
        line = Text()
        for cell, width in zip(cells, widths):
            line.append_text(_cell(cell, width))
        line.append_text(cells[-1])
        lines.append(line)

    return Text("\n").join(lines)
