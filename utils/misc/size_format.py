"""
Human readable byte counts for the report columns.

Project TeamAudit
Copyright (C) 2024-2025 Tony Mason

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published
by the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

_units = (
    ("GB", 1024 ** 3),
    ("MB", 1024 ** 2),
    ("KB", 1024),
)


def format_size(size: int) -> str:
    """
    Render a byte count using the largest 1024-based unit it reaches,
    rounded to two decimal places: 1023 -> "1023 Bytes", 1024 -> "1 KB",
    1536 -> "1.5 KB".  The count must be a non-negative integer.
    """
    assert isinstance(size, int) and size >= 0, f"size must be a non-negative integer, not {size!r}"
    for unit, threshold in _units:
        if size >= threshold:
            value = f"{round(size / threshold, 2):.2f}".rstrip("0").rstrip(".")
            return f"{value} {unit}"
    return f"{size} Bytes"
