"""Light markdown structuring for free-text model replies."""

import re

import structlog

logger = structlog.get_logger(__name__)

_MARKDOWN_HEADING = re.compile(r"^#{1,6}\s", re.M)
_SECTION_HEADER = re.compile(r"^[A-Z][A-Za-z\s]+:")
_NUMBERED_ITEM = re.compile(r"^\d+\.\s")
_BULLET_ITEM = re.compile(r"^[•\-*]\s")


def format_ai_response(response: str) -> str:
    """
    Give a plain reply some markdown structure.

    Replies that already contain headings are returned unchanged. Otherwise
    ``Capitalized Phrase:`` lines become ``##`` headings, numbered items are
    grouped under ``## Key Points`` and bullets under ``## Details`` unless
    they already sit under a heading.
    """
    if _MARKDOWN_HEADING.search(response):
        return response

    sections: list[str] = []
    current = ""

    def start_section(heading: str) -> None:
        nonlocal current
        if current:
            sections.append(current.strip())
        current = heading

    for line in response.split("\n"):
        if _SECTION_HEADER.match(line):
            start_section(f"## {line}\n")
        elif _NUMBERED_ITEM.match(line):
            if "## " not in current:
                start_section("## Key Points\n")
            current += line + "\n"
        elif _BULLET_ITEM.match(line):
            if "## " not in current:
                start_section("## Details\n")
            current += line + "\n"
        else:
            current += line + "\n"

    if current:
        sections.append(current.strip())

    sections = [section for section in sections if section]
    if not sections:
        return f"## Summary\n{response}"

    return "\n\n".join(sections)
