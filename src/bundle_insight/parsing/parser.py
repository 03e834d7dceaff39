"""Turn bundle text into ordered ModuleRecords."""

from __future__ import annotations

from typing import List, Optional

from ..models import ModuleRecord
from .classifier import extract_package_name
from .position_map import PositionMap
from .provenance import placeholder_path, resolve_module_path
from .segmenter import ModuleChunk, segment_bundle, segment_size_only


def _record_for(chunk: ModuleChunk, position_map: Optional[PositionMap]) -> ModuleRecord:
    if chunk.structured:
        path = resolve_module_path(
            chunk.body,
            chunk.chunk_index,
            chunk.declared_id,
            position_map=position_map,
            trailer=chunk.trailer,
        )
    else:
        path = placeholder_path(chunk.chunk_index, chunk.declared_id, position_map)

    return ModuleRecord(
        id=chunk.declared_id,
        path=path,
        size_bytes=chunk.size_bytes,
        package=extract_package_name(path),
    )


def parse_modules(
    bundle_text: str,
    position_map: Optional[PositionMap] = None,
    structured: bool = True,
) -> List[ModuleRecord]:
    """Segment ``bundle_text`` and attribute every module.

    Args:
        bundle_text: Full bundle source.
        position_map: Optional positional source list.
        structured: When False, skip head matching and size every marker
            occurrence approximately.
    """
    chunks = segment_bundle(bundle_text) if structured else segment_size_only(bundle_text)
    return [_record_for(chunk, position_map) for chunk in chunks]
