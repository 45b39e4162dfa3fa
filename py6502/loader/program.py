"""Program metadata structures for 6502 image loaders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class AddressRegion:
    """Represents a contiguous address range within the 6502 address space."""

    start: int
    end: int
    comment: str = ""

    def length(self) -> int:
        return self.end - self.start + 1


@dataclass
class ProgramImage:
    """Holds the regions a loader wrote into memory."""

    name: str = ""
    regions: List[AddressRegion] = field(default_factory=list)

    def add_region(self, start: int, end: int, comment: str = "") -> None:
        self.regions.append(AddressRegion(start, end, comment))

    def total_bytes(self) -> int:
        return sum(region.length() for region in self.regions)
