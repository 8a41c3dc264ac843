"""Splits résumé text into named sections by recognizing heading lines.

Single linear pass over the lines:
1. Start under the sentinel section "Header".
2. A line matching a known heading flushes the buffer under the previous
   section name and opens a new buffer under the heading's canonical name.
   The heading line itself is kept as the first line of the new section.
3. Flush the final buffer at end of input.

Duplicate canonical headings overwrite the earlier section (last write wins).
"""

import re

HEADER_SECTION = "Header"

HEADING_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "Contact Information",
        re.compile(r"^\s*(CONTACT|PERSONAL)\s+INFORMATION\s*$", re.IGNORECASE),
    ),
    (
        "Summary",
        re.compile(r"^\s*(SUMMARY|PROFESSIONAL\s+SUMMARY|PROFILE)\s*$", re.IGNORECASE),
    ),
    (
        "Experience",
        re.compile(
            r"^\s*(EXPERIENCE|WORK\s+EXPERIENCE|PROFESSIONAL\s+EXPERIENCE)\s*$",
            re.IGNORECASE,
        ),
    ),
    (
        "Education",
        re.compile(r"^\s*(EDUCATION|ACADEMIC\s+BACKGROUND)\s*$", re.IGNORECASE),
    ),
    (
        "Skills",
        re.compile(
            r"^\s*(SKILLS|TECHNICAL\s+SKILLS|CORE\s+COMPETENCIES)\s*$", re.IGNORECASE
        ),
    ),
    ("Projects", re.compile(r"^\s*(PROJECTS|KEY\s+PROJECTS)\s*$", re.IGNORECASE)),
    (
        "Certifications",
        re.compile(r"^\s*(CERTIFICATIONS|CERTIFICATES)\s*$", re.IGNORECASE),
    ),
    ("Languages", re.compile(r"^\s*LANGUAGES\s*$", re.IGNORECASE)),
    ("Interests", re.compile(r"^\s*(INTERESTS|HOBBIES)\s*$", re.IGNORECASE)),
    ("References", re.compile(r"^\s*REFERENCES\s*$", re.IGNORECASE)),
)


def match_heading(line: str) -> str | None:
    """Return the canonical section name if the line is a known heading."""
    for name, pattern in HEADING_PATTERNS:
        if pattern.match(line):
            return name
    return None


def segment(text: str) -> dict[str, str]:
    """Split document text into an insertion-ordered mapping of section -> text.

    Empty text yields {"Header": ""}; text without headings yields a single
    "Header" section holding everything.
    """
    sections: dict[str, str] = {}
    current_name = HEADER_SECTION
    buffer: list[str] = []

    for line in text.split("\n"):
        heading = match_heading(line)
        if heading is None:
            buffer.append(line)
            continue
        if buffer:
            _flush(sections, current_name, buffer)
        current_name = heading
        buffer = [line]

    if buffer:
        _flush(sections, current_name, buffer)
    return sections


def _flush(sections: dict[str, str], name: str, buffer: list[str]) -> None:
    sections[name] = "\n".join(buffer)
