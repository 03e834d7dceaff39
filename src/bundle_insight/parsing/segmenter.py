"""Module segmenter for Metro-style bundles.

Every module in the target format is registered through a call of the shape::

    __d(function(g,r,i,a,m,e,d){<body>},<id>,<deps>[,"<path>"]);

The segmenter splits the bundle on the ``__d(`` marker and recovers, for each
occurrence, the factory body, the declared id and the text span that the
whole call occupies. Boundaries are found with a small delimiter-balancing
state machine rather than a JavaScript parser, so results are approximate
on hostile input but the scan is linear and never raises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from ..models import ModuleId

MODULE_MARKER = "__d("

# Upper bound, in UTF-8 bytes, on the span attributed to a module whose
# end cannot be found.
MAX_MODULE_SPAN = 10_000

_OPENERS = frozenset("{([")
_CLOSERS = frozenset("})]")
_QUOTES = frozenset("\"'`")

_FACTORY_HEAD_RE = re.compile(r"function\s*\([^)]*\)\s*\{")
_DECLARED_ID_RE = re.compile(r"\s*,\s*(\d+)\s*,")
_LOOSE_ID_RE = re.compile(r"function\s*\([^)]*\)\s*\{[\s\S]*?\}\s*,\s*(\d+)\s*,")


@dataclass(frozen=True)
class ModuleChunk:
    """Raw text recovered for one marker occurrence.

    Attributes:
        chunk_index: Zero-based position among marker occurrences.
        declared_id: Id written after the factory, or the chunk index when
            none could be read.
        body: Factory body between its braces (empty in size-only mode).
        code: Marker plus the text of the whole registration call.
        trailer: Text between the factory's closing brace and the end of the
            call: id, dependency list, optional embedded path.
        structured: False when the chunk was produced in size-only mode.
    """

    chunk_index: int
    declared_id: ModuleId
    body: str
    code: str
    trailer: str = ""
    structured: bool = True

    @property
    def size_bytes(self) -> int:
        return len(self.code.encode("utf-8", errors="surrogatepass"))


def find_unbalanced_close(text: str, start: int = 0) -> int:
    """Return the index of the first closing delimiter with no matching opener.

    ``{}``, ``()`` and ``[]`` share one depth counter. Delimiters inside
    single, double or backtick quoted strings are ignored; a backslash
    escapes the character that follows it.

    Returns:
        Index into ``text``, or -1 if depth never goes negative.
    """
    depth = 0
    string_delim: Optional[str] = None
    escaped = False

    for index in range(start, len(text)):
        char = text[index]

        if escaped:
            escaped = False
            continue
        if char == "\\":
            escaped = True
            continue

        if string_delim is not None:
            if char == string_delim:
                string_delim = None
            continue

        if char in _QUOTES:
            string_delim = char
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
            if depth < 0:
                return index

    return -1


def _capped_end(segment: str) -> int:
    """Length of the longest prefix of ``segment`` that fits in MAX_MODULE_SPAN bytes."""
    used = 0
    for index, char in enumerate(segment[:MAX_MODULE_SPAN]):
        used += len(char.encode("utf-8", errors="surrogatepass"))
        if used > MAX_MODULE_SPAN:
            return index
    return min(len(segment), MAX_MODULE_SPAN)


def _structured_chunk(segment: str, chunk_index: int) -> Optional[ModuleChunk]:
    """Match the conventional factory shape, or return None."""
    head = _FACTORY_HEAD_RE.match(segment)
    if head is None:
        return None

    body_open = head.end()
    body_close = find_unbalanced_close(segment, body_open)
    if body_close == -1:
        return None

    id_match = _DECLARED_ID_RE.match(segment, body_close + 1)
    if id_match is None:
        return None

    # Depth is back to zero after the body, so the next unmatched closer
    # ends the registration call itself.
    call_close = find_unbalanced_close(segment, body_close + 1)
    span_end = call_close + 1 if call_close != -1 else _capped_end(segment)
    span_end = max(span_end, body_close + 1)

    return ModuleChunk(
        chunk_index=chunk_index,
        declared_id=int(id_match.group(1)),
        body=segment[body_open:body_close],
        code=MODULE_MARKER + segment[:span_end],
        trailer=segment[body_close + 1:span_end],
    )


def _size_only_chunk(segment: str, chunk_index: int) -> ModuleChunk:
    loose = _LOOSE_ID_RE.match(segment)
    declared_id: ModuleId = int(loose.group(1)) if loose else chunk_index
    return ModuleChunk(
        chunk_index=chunk_index,
        declared_id=declared_id,
        body="",
        code=MODULE_MARKER + segment[:_capped_end(segment)],
        structured=False,
    )


def _segments(text: str) -> List[str]:
    # The text before the first marker is bundler preamble.
    return text.split(MODULE_MARKER)[1:]


def segment_size_only(text: str) -> List[ModuleChunk]:
    """Approximate every marker occurrence without structural matching."""
    return [_size_only_chunk(segment, i) for i, segment in enumerate(_segments(text))]


def segment_bundle(text: str) -> List[ModuleChunk]:
    """Split bundle text into one chunk per module-registration marker.

    Occurrences whose head does not match the conventional factory shape are
    kept in size-only mode, so chunk indices stay aligned with the marker
    order that a position map is keyed on.
    """
    chunks: List[ModuleChunk] = []
    for chunk_index, segment in enumerate(_segments(text)):
        chunk = _structured_chunk(segment, chunk_index)
        if chunk is None:
            chunk = _size_only_chunk(segment, chunk_index)
        chunks.append(chunk)
    return chunks
