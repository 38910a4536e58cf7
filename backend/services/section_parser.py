"""Job-description section segmentation.

Splits a JD into bounded sections on heading lines ("Requirements:",
"Nice to have", "Benefits", ...). Each section runs until the next
recognized heading, unlike the trailing "heading to end of text" search
used by default in severity bucketing.
"""

import re

# Section header patterns and their canonical names
SECTION_PATTERNS: dict[str, list[str]] = {
    "preferred": [
        r"nice[\s-]+to[\s-]+haves?",
        r"(?:preferred|desired|bonus|optional|additional)\s*(?:skills|qualifications|requirements|experience)?",
        r"(?:it'?s\s+)?a\s+plus",
        r"bonus\s+points",
    ],
    "requirements": [
        r"(?:minimum|basic|key|job)?\s*requirements?",
        r"(?:minimum|basic|required)?\s*qualifications?",
        r"must[\s-]+haves?",
        r"what\s+you(?:'ll)?\s+(?:need|bring)",
        r"who\s+you\s+are",
        r"required\s*(?:skills|experience)?",
    ],
    "responsibilities": [
        r"(?:key|core|main)?\s*responsibilities",
        r"(?:your\s+)?duties",
        r"what\s+you(?:'ll)?\s+do",
        r"the\s+role",
    ],
    "summary": [
        r"(?:job|position|role)\s*(?:summary|overview|description)",
        r"overview",
        r"summary",
    ],
    "benefits": [
        r"(?:our\s+)?benefits",
        r"perks(?:\s+and\s+benefits)?",
        r"what\s+we\s+offer",
        r"compensation",
    ],
    "about": [
        r"about\s+(?:us|the\s+company|the\s+team)",
        r"who\s+we\s+are",
    ],
}

# Compile all patterns into a single regex per section. A heading may be
# alone on its line or carry inline content after a colon.
_COMPILED: dict[str, re.Pattern] = {}
for section, patterns in SECTION_PATTERNS.items():
    combined = "|".join(patterns)
    _COMPILED[section] = re.compile(
        rf"^\s*(?:{combined})\s*(?::\s*(?P<rest>.*))?$", re.IGNORECASE
    )


def match_heading(line: str) -> tuple[str, str] | None:
    """Return (section, inline content) if the line is a section heading."""
    stripped = line.strip().lstrip("#*•-").strip().rstrip("*").strip()
    if not stripped:
        return None
    for section_name, pattern in _COMPILED.items():
        match = pattern.match(stripped)
        if match:
            return section_name, match.group("rest") or ""
    return None


def parse_sections(text: str) -> dict[str, str]:
    """Split JD text into named sections.

    Returns a dict mapping section name -> section text content.
    Unmatched text at the top goes into 'header'. Repeated headings of the
    same kind are concatenated.
    """
    sections: dict[str, list[str]] = {}
    current_section = "header"
    current_lines: list[str] = []

    def _flush() -> None:
        content = "\n".join(current_lines).strip()
        if content:
            sections.setdefault(current_section, []).append(content)

    for line in text.split("\n"):
        heading = match_heading(line)
        if heading:
            _flush()
            current_section, inline = heading
            current_lines = [inline] if inline else []
        else:
            current_lines.append(line)

    _flush()

    return {name: "\n".join(parts) for name, parts in sections.items()}
