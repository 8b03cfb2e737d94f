"""Map mode flags and positional refs to a single operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from gitai.errors import InvalidArguments


class Mode(str, Enum):
    """Top-level operation selected on the command line."""

    BRANCH = "branch"
    TAG = "tag"
    FEATURE = "feature"
    COMPARE = "compare"
    ALL_BRANCHES = "all-branches"
    RANGE = "range"
    SETUP = "setup"
    HELP = "help"


# mode -> (flag, usage, min refs, max refs)
MODES = {
    Mode.BRANCH: ("-b/--branch", "[BRANCH]", 0, 1),
    Mode.TAG: ("-t/--tag", "TAG [PREV_TAG]", 1, 2),
    Mode.FEATURE: ("-f/--feature", "[BRANCH] [BASE]", 0, 2),
    Mode.COMPARE: ("-c/--compare", "BASE FEATURE", 2, 2),
    Mode.ALL_BRANCHES: ("-a/--all-branches", "[BASE]", 0, 1),
    Mode.RANGE: ("-r/--range", "FROM TO", 2, 2),
    Mode.SETUP: ("-s/--setup", "", 0, 0),
    Mode.HELP: ("-h/--help", "", 0, 0),
}


@dataclass
class Invocation:
    """A validated operation with its positional arguments."""

    mode: Mode
    refs: list[str] = field(default_factory=list)

    def ref(self, index: int) -> Optional[str]:
        """Positional ref at index, or None if it was omitted."""
        return self.refs[index] if index < len(self.refs) else None


def parse_invocation(modes: list[Mode], refs: Optional[list[str]] = None) -> Invocation:
    """Validate the selected modes against the positional refs.

    Args:
        modes: Mode flags given on the command line.
        refs: Positional arguments following the flags.

    Returns:
        The single operation to run. HELP when nothing was given.

    Raises:
        InvalidArguments: If zero or several modes are selected with
            arguments, or the number of refs does not fit the mode.
    """
    refs = list(refs or [])
    modes = list(dict.fromkeys(modes))

    if not modes:
        if refs:
            raise InvalidArguments(
                f"No mode given for {' '.join(refs)!r}; use one of "
                + ", ".join(flag for flag, *_ in MODES.values())
            )
        return Invocation(Mode.HELP)

    if len(modes) > 1:
        flags = ", ".join(MODES[m][0] for m in modes)
        raise InvalidArguments(f"Options are mutually exclusive: {flags}")

    mode = modes[0]
    flag, usage, min_refs, max_refs = MODES[mode]
    if not min_refs <= len(refs) <= max_refs:
        expected = f"{flag} {usage}".strip()
        raise InvalidArguments(f"Wrong number of arguments, usage: git ai {expected}")

    if any(not ref.strip() for ref in refs):
        raise InvalidArguments("Empty branch, tag or commit name")

    return Invocation(mode, refs)
