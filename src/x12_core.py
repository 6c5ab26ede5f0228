"""X12 tokenizer core for the x12json API.

This module exposes one public parsing function: ``parse_x12(content: str)``
that turns a raw X12 interchange into an ordered list of segments, each an
identifier plus its data elements, ready to be serialized as JSON.

NOTES:
- Delimiters are fixed: segments end with ``~`` and elements are separated by
  ``*``. They are not read from the ISA header.
- Parsing is total. Anything that is text produces a document; malformed or
  schema-invalid content passes through uninterpreted.
- Component separators (``:``) and repetition separators (``^``) are left
  inside the element strings.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Tuple
from dataclasses import dataclass, field

# ------------------------------ DELIMITERS -----------------------------------------
SEGMENT_TERMINATOR = "~"
ELEMENT_SEPARATOR = "*"


# ------------------------------ DOCUMENT MODEL -------------------------------------
@dataclass(frozen=True)
class Segment:
    """One X12 record: the segment identifier and its data elements.

    ``elements`` excludes the identifier itself, so ``ST*850*0001`` becomes
    ``Segment("ST", ("850", "0001"))`` and ``HL`` becomes ``Segment("HL", ())``.
    """

    id: str
    elements: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "elements": list(self.elements)}


@dataclass(frozen=True)
class X12Document:
    """Ordered segments of one interchange, in input order."""

    segments: Tuple[Segment, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def to_dict(self) -> Dict[str, Any]:
        return {"segments": [seg.to_dict() for seg in self.segments]}


# ------------------------------ PARSER ---------------------------------------------
def _parse_segment(raw_segment: str) -> Segment:
    parts = raw_segment.split(ELEMENT_SEPARATOR)
    return Segment(id=parts[0], elements=tuple(parts[1:]))


def parse_x12(content: str) -> X12Document:
    """Split raw X12 text into segments and elements.

    Steps:
      - Split on the segment terminator, keeping empty candidates between
        consecutive terminators and after a trailing one.
      - Trim surrounding whitespace (line-wrapped files carry CR/LF between
        segments) and drop candidates that end up empty.
      - Split the rest on the element separator. The first piece is the
        identifier, the remaining pieces are the elements, untouched.

    Never raises for ``str`` input; ``parse_x12("")`` returns an empty document.
    """
    segments: List[Segment] = []
    for raw_seg in content.split(SEGMENT_TERMINATOR):
        seg = raw_seg.strip()
        if not seg:
            continue
        segments.append(_parse_segment(seg))
    return X12Document(segments=tuple(segments))


# ------------------------------ SERIALIZATION --------------------------------------
def document_to_dict(document: X12Document) -> Dict[str, Any]:
    """JSON-ready mapping: ``{"segments": [{"id": ..., "elements": [...]}, ...]}``."""
    return document.to_dict()


def render_x12(document: X12Document) -> str:
    """Rebuild delimited text from a parsed document, one ``~`` after every segment.

    ``parse_x12(render_x12(doc)) == doc`` holds as long as no identifier or element
    contains a delimiter character (there is no escaping in X12).
    """
    rendered: List[str] = []
    for seg in document.segments:
        rendered.append(ELEMENT_SEPARATOR.join((seg.id,) + seg.elements) + SEGMENT_TERMINATOR)
    return "".join(rendered)


if __name__ == "__main__":
    import json

    # Example usage with a minimal purchase order envelope.
    mock_x12 = (
        "ISA*00*          *00*          *ZZ*SENDER         *ZZ*RECEIVER       "
        "*250115*1200*U*00401*000000001*0*P*>~\n"
        "GS*PO*SENDER*RECEIVER*20250115*1200*1*X*004010~\n"
        "ST*850*0001~BEG*00*NE*PO123**20250115~SE*3*0001~\n"
        "GE*1*1~IEA*1*000000001~"
    )
    print(json.dumps(document_to_dict(parse_x12(mock_x12)), indent=2))
