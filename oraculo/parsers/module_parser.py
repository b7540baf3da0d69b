"""
oraculo/parsers/module_parser.py
Turn raw line groups ("vetores") into 7-row digit modules.
Invalid groups are reported but still converted.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from oraculo.models.records import DataSet, ParseResult
from oraculo.utils.config import get_parser_params
from oraculo.utils.logger import get_logger

log = get_logger("parser")

DIGITS = "0123456789"


def _is_digits(text: str) -> bool:
    return all(ch in DIGITS for ch in text)


class ModuleParser:
    """Validate and split line groups into digit rows."""

    def __init__(self, params: dict[str, Any] | None = None):
        params = params or get_parser_params()
        self.row_width = params["row_width"]
        self.tail_index = params["tail_index"]
        self.tail_width = params["tail_width"]

    def validate_line(self, idx: int, line: str) -> bool:
        """
        Lines before the tail must be `row_width` digits, the tail line
        `tail_width` digits. Lines past the tail only need to be non-empty.
        """
        if len(line) == 0:
            return False
        if idx < self.tail_index:
            return len(line) == self.row_width and _is_digits(line)
        if idx == self.tail_index:
            return len(line) == self.tail_width and _is_digits(line)
        return True

    def validate_group(self, lines: Sequence[str]) -> bool:
        return all(self.validate_line(idx, line) for idx, line in enumerate(lines))

    @staticmethod
    def to_digits(line: str) -> tuple[int, ...]:
        # Lenient: anything that is not a decimal digit is dropped.
        return tuple(int(ch) for ch in line if ch in DIGITS)

    def parse(self, groups: Sequence[Sequence[str]]) -> ParseResult:
        modules: list[DataSet] = []
        errors: list[str] = []

        for group_idx, lines in enumerate(groups):
            if not self.validate_group(lines):
                msg = f"Vetor {group_idx + 1} instável."
                log.warning(f"{msg} lines={list(lines)}")
                errors.append(msg)
            modules.append([self.to_digits(line) for line in lines])

        log.debug(f"Parsed {len(modules)} modules, {len(errors)} unstable")
        return ParseResult(modules=modules, errors=errors)


def parse_modules(groups: Sequence[Sequence[str]]) -> ParseResult:
    return ModuleParser().parse(groups)


def split_groups(text: str) -> list[list[str]]:
    """Split text into line groups separated by blank lines."""
    groups: list[list[str]] = []
    current: list[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            if current:
                groups.append(current)
                current = []
            continue
        current.append(line)
    if current:
        groups.append(current)
    return groups


def read_groups(path: str | Path) -> list[list[str]]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Module file not found: {path}")
    return split_groups(path.read_text(encoding="utf-8"))
