"""
Description formatting - turn AI-assisted case descriptions into plain
structured text.

Descriptions come in two shapes:

1. The mobile app's combined format:

       --- USER'S INITIAL DESCRIPTION ---
       ...
       --- AI-GENERATED SUMMARY ---
       ...

2. Free Markdown-ish text with `**Header**` or `### Header` lines.

Both are reduced to a list of header/text blocks.
"""

from typing import Dict, List
import re

NO_DESCRIPTION = "No description provided."

USER_SECTION = "USER'S INITIAL DESCRIPTION"
AI_SECTION = "AI-GENERATED SUMMARY"

_SECTION_MARKER_RE = re.compile(r"--- (.*?) ---")
_HEADER_RE = re.compile(r"^\s*(?:\*\*(.+?)\*\*|###\s*(.+?))\s*$")


def clean_markdown_artifacts(text: str) -> str:
    """Strip emphasis markers, backticks and repeated whitespace."""
    text = re.sub(r"\*{1,3}([^*]*?)\*{1,3}", r"\1", text)
    text = re.sub(r"\*+", "", text)
    text = re.sub(r"_{1,3}([^_]*?)_{1,3}", r"\1", text)
    text = re.sub(r"`+([^`]*?)`+", r"\1", text)
    text = re.sub(r"\s+", " ", text)
    return text.strip()


def _header_text(raw: str) -> str:
    return re.sub(r":+$", "", raw.replace("*", "").strip()).strip()


def _parse_sectioned(text: str) -> List[Dict[str, str]]:
    blocks = []
    # re.split keeps the captured marker names at odd indices
    parts = _SECTION_MARKER_RE.split(text)
    for index, part in enumerate(parts):
        part = part.strip()
        if not part:
            continue
        if index % 2 == 1:
            blocks.append({"kind": "header", "text": part})
        else:
            content = clean_markdown_artifacts(part)
            if content:
                blocks.append({"kind": "text", "text": content})
    return blocks


def _parse_markdown(text: str) -> List[Dict[str, str]]:
    blocks: List[Dict[str, str]] = []
    paragraph: List[str] = []

    def flush():
        content = clean_markdown_artifacts(" ".join(paragraph))
        if content:
            blocks.append({"kind": "text", "text": content})
        paragraph.clear()

    for line in text.splitlines():
        match = _HEADER_RE.match(line)
        if match:
            flush()
            header = _header_text(match.group(1) or match.group(2))
            if header:
                blocks.append({"kind": "header", "text": header})
        else:
            paragraph.append(line)
    flush()
    return blocks


def parse_description_sections(description: str) -> List[Dict[str, str]]:
    """
    Split a description into ordered {"kind": "header"|"text", "text"} blocks.

    Empty or whitespace-only input yields an empty list.
    """
    if not description or not description.strip():
        return []
    if USER_SECTION in description or AI_SECTION in description:
        return _parse_sectioned(description)
    return _parse_markdown(description)


def format_description_as_text(description: str) -> str:
    """Plain-text rendering: headers become "Header:" lines, blocks are blank-line separated."""
    blocks = parse_description_sections(description)
    if not blocks:
        return NO_DESCRIPTION

    lines = []
    for block in blocks:
        if block["kind"] == "header":
            if lines:
                lines.append("")
            lines.append(f"{block['text']}:")
        else:
            lines.append(block["text"])
    return "\n".join(lines).strip() or NO_DESCRIPTION


def truncate_description(description: str, max_length: int = 200) -> str:
    """
    Single-line preview of at most `max_length` characters plus "...".

    Cuts on the last space when it falls in the final 20% of the limit.
    """
    if not description:
        return NO_DESCRIPTION

    plain = clean_markdown_artifacts(_SECTION_MARKER_RE.sub(" ", description))
    if len(plain) <= max_length:
        return plain or NO_DESCRIPTION

    truncated = plain[:max_length]
    last_space = truncated.rfind(" ")
    cut_point = last_space if last_space > max_length * 0.8 else max_length
    return plain[:cut_point] + "..."
