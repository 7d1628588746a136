"""
Work package document text operations.

A work package file is a frontmatter block between ``---`` marker lines,
optional blank-line padding, then a Markdown body that may hold an
``## Activity Log`` section. Every function here works on raw text so a
rewrite only touches the field or section it changes; re-serializing an
unmodified document reproduces it byte for byte.
"""

import re
from datetime import datetime, timezone
from pathlib import Path

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
ACTIVITY_LOG_HEADING = "## Activity Log"

_FRONTMATTER_RE = re.compile(
    r"\A(---\r?\n.*?\r?\n---\r?\n)((?:\r?\n)*)(.*)\Z", re.DOTALL
)
_ACTIVITY_LOG_RE = re.compile(r"^## Activity Log[ \t]*(?=\r?\n|\Z)", re.MULTILINE)
_CLOSING_MARKER_RE = re.compile(r"^---(\r?\n)\Z", re.MULTILINE)


def split(text: str) -> tuple[str, str, str]:
    """
    Split a document into (metadata_block, body, padding).

    The metadata block must start at the very first byte. Documents without
    a well-formed block are returned as ("", text, "").

    Example:
        >>> split("---\\nid: WP01\\n---\\n\\n# Title\\n")
        ('---\\nid: WP01\\n---\\n', '# Title\\n', '\\n')
    """
    match = _FRONTMATTER_RE.match(text)
    if match is None:
        return "", text, ""
    return match.group(1), match.group(3), match.group(2)


def join(metadata_block: str, body: str, padding: str) -> str:
    """Inverse of split()."""
    return metadata_block + padding + body


def line_ending(text: str) -> str:
    """Line ending used by a document: CRLF if it has any, else LF."""
    return "\r\n" if "\r\n" in text else "\n"


def _key_pattern(key: str) -> str:
    return rf"^{re.escape(key)}:"


def get_scalar(metadata_block: str, key: str) -> str | None:
    """
    Look up a single-line ``key: value`` entry.

    Surrounding single or double quotes are dropped. Returns None when the
    key is absent or has no inline value.
    """
    match = re.search(
        _key_pattern(key) + r"[ \t]*[\"']?([^\"'\r\n]+)[\"']?",
        metadata_block,
        re.MULTILINE,
    )
    if match is None:
        return None
    value = match.group(1).strip()
    return value or None


def set_scalar(metadata_block: str, key: str, value: str) -> str:
    """
    Set ``key: value`` in a metadata block.

    Replaces the existing key line in place, or inserts a new line right
    before the closing marker. Other lines keep their content, order and
    line endings. An empty block (document without frontmatter) is
    returned unchanged.
    """
    line = f"{key}: {value}"
    key_line = re.compile(_key_pattern(key) + r"[^\r\n]*", re.MULTILINE)
    if key_line.search(metadata_block):
        return key_line.sub(lambda _m: line, metadata_block)
    return _CLOSING_MARKER_RE.sub(
        lambda m: f"{line}{m.group(1)}---{m.group(1)}", metadata_block, count=1
    )


def append_activity_log(body: str, entry_line: str, newline: str | None = None) -> str:
    """
    Add an entry at the top of the Activity Log section.

    Entries are kept newest first: the new line goes directly below the
    heading and its blank line. Without a heading, a new section is added
    at the end of the body. `newline` defaults to the body's own line
    ending.
    """
    eol = newline or line_ending(body)
    match = _ACTIVITY_LOG_RE.search(body)
    if match is None:
        return f"{body}{eol}{eol}{ACTIVITY_LOG_HEADING}{eol}{eol}{entry_line}{eol}"

    head = body[: match.end()]
    rest = body[match.end():]
    if rest.startswith(eol * 2):
        rest = rest[2 * len(eol):]
    elif rest.startswith(eol):
        rest = rest[len(eol):]
    return f"{head}{eol}{eol}{entry_line}{eol}{rest}"


def utc_timestamp(now: datetime | None = None) -> str:
    """Format a timestamp for activity log entries (always UTC)."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def format_entry(timestamp: str, actor: str, stage: str, note: str) -> str:
    """Build an activity log line.

    `stage` is either a transition ("planned → doing") or the current lane.
    """
    return f"- **{timestamp}** | {actor} | {stage} | {note}"


def read_document(path: Path) -> str:
    # newline="" keeps CRLF line endings as they are on disk
    with path.open(encoding="utf-8", newline="") as f:
        return f.read()


def write_document(path: Path, text: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
