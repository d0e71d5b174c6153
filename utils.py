# utils.py

import random
import re
from typing import Iterable, List, Optional

from engine import StepSnapshot

HIT_COLOR = "#dcfce7"       # light green
REPLACED_COLOR = "#fee2e2"  # light red
EMPTY_COLOR = "#ffffff"

_SEPARATORS = re.compile(r"[\s,]+")


class ReferenceParseError(ValueError):
    """Raised when a reference string contains something other than integers."""


def parse_reference_string(text: str) -> List[int]:
    """
    Turn free-form text such as "7 0 1 2" or "7,0,1,2" into page numbers.

    Blank text is a valid, empty reference string.
    """
    pages = []
    for token in _SEPARATORS.split(text.strip()):
        if token == "":
            continue
        try:
            pages.append(int(token))
        except ValueError:
            raise ReferenceParseError(f"Invalid page number: {token!r}") from None
    return pages


def format_reference_string(pages: Iterable[int]) -> str:
    return " ".join(str(p) for p in pages)


def random_reference_string(length: int, max_page: int,
                            seed: Optional[int] = None) -> List[int]:
    """Random workload of `length` pages drawn from 0..max_page."""
    rng = random.Random(seed)
    return [rng.randint(0, max_page) for _ in range(length)]


def ratio(part: int, total: int) -> float:
    return part / total if total > 0 else 0.0


def format_ratio(value: float) -> str:
    return f"{value:.2f}"


def cell_label(page: Optional[int]) -> str:
    return "-" if page is None else str(page)


def get_color(step: StepSnapshot, slot: int) -> str:
    """Return a color for one frame slot of a timeline column."""
    if slot == step.hit_frame:
        return HIT_COLOR
    if slot == step.evicted_frame:
        return REPLACED_COLOR
    return EMPTY_COLOR
