"""The [AI] commit message marker.

A commit is AI-authored when the first non-blank line of its message
starts with the exact literal ``[AI]`` followed by whitespace or the end
of the line. Any other commit, including one with no marker at all, is
non-AI.

Committed messages are read as they are: a subject such as ``#12 fix``
is a real subject, not a comment. Only the pending message that git
hands to the commit-msg hook can still hold comment lines, and only when
git opened an editor; ``encode`` skips those when given the comment
character.
"""

from __future__ import annotations

from typing import Optional

from gitai.models.commit import ClassifiedCommit, Commit, Marker

AI_MARKER = "[AI]"
COMMENT_CHAR = "#"


def _subject_index(lines: list[str], comment_char: Optional[str] = None) -> Optional[int]:
    """Index of the subject line: first non-blank line, skipping comments
    only when comment_char is given."""
    for index, line in enumerate(lines):
        if not line.strip():
            continue
        if comment_char and line.startswith(comment_char):
            continue
        return index
    return None


def _has_marker(line: str) -> bool:
    if not line.startswith(AI_MARKER):
        return False
    rest = line[len(AI_MARKER):]
    return not rest or rest[0].isspace()


def encode(message: str, is_ai: bool, comment_char: Optional[str] = None) -> str:
    """Prepend the AI marker to the subject line of a commit message.

    Args:
        message: Raw commit message.
        is_ai: Whether the commit was written with AI assistance.
        comment_char: Comment prefix git will strip from the message
            after the hook runs. Lines starting with it are not
            candidates for the subject. None when git keeps every line.

    Returns:
        The message with the marker applied at the start of the subject
        line (leading whitespace on that line is dropped). Unchanged when
        is_ai is False, when the message is already marked, or when it
        has no subject line.
    """
    if not is_ai:
        return message

    lines = message.splitlines(keepends=True)
    index = _subject_index(lines, comment_char)
    if index is None:
        return message

    subject = lines[index].lstrip()
    if not _has_marker(subject):
        subject = f"{AI_MARKER} {subject}"

    lines[index] = subject
    return "".join(lines)


def decode(message: str) -> bool:
    """Return True if the message's first non-blank line carries the AI marker."""
    lines = message.splitlines()
    index = _subject_index(lines)
    if index is None:
        return False
    return _has_marker(lines[index])


def classify(commit: Commit) -> ClassifiedCommit:
    """Attach the marker state decoded from the commit message."""
    marker = Marker.AI if decode(commit.message) else Marker.NON_AI
    return ClassifiedCommit(commit=commit, marker=marker)
