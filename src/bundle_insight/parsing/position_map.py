"""Position-map reader.

A position map is a source-map-like JSON document whose ``sources`` array
lists original file paths in module-emission order. Lookups are positional:
entry ``i`` belongs to the i-th module boundary found by the segmenter, not
to the module whose declared id is ``i``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional, Tuple

from ..exceptions import PositionMapError


@dataclass(frozen=True)
class PositionMap:
    """Read-only, index-aligned list of original source paths."""

    sources: Tuple[object, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "PositionMap":
        """Parse map text.

        Raises:
            PositionMapError: If the text is not JSON, not an object, or has
                no ``sources`` array.
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise PositionMapError(f"not valid JSON: {e}")

        if not isinstance(data, dict):
            raise PositionMapError("top-level value is not an object")

        sources = data.get("sources")
        if not isinstance(sources, list):
            raise PositionMapError("missing 'sources' array")

        return cls(sources=tuple(sources))

    def __len__(self) -> int:
        return len(self.sources)

    def path_at(self, index: int) -> Optional[str]:
        """Return the raw path recorded for the ``index``-th module, if any."""
        if index < 0 or index >= len(self.sources):
            return None
        entry = self.sources[index]
        if not isinstance(entry, str) or not entry:
            return None
        return entry


def load_position_map(text: Optional[str]) -> Optional[PositionMap]:
    """Parse map text, degrading to ``None`` when it is absent or malformed."""
    if text is None:
        return None
    try:
        return PositionMap.parse(text)
    except PositionMapError:
        return None
