"""Install the git-ai hooks into a repository."""

from __future__ import annotations

import logging
import shutil
import stat
from pathlib import Path
from typing import Optional

from gitai.errors import InstallationFailure
from gitai.vcs.git import GitRepository

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
COMMIT_MSG_HOOK = "commit-msg"
HELPER_SCRIPT = "ai-confirmation-msg"
HOOK_FILES = (COMMIT_MSG_HOOK, HELPER_SCRIPT)
SIGNATURE = "# git-ai commit-msg hook"
BACKUP_SUFFIX = ".pre-git-ai"
EXECUTABLE = 0o755


def _is_executable(path: Path) -> bool:
    return bool(path.stat().st_mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


def _backup_foreign_hook(hook: Path, template: Path) -> Optional[Path]:
    """Keep a copy of a commit-msg hook that git-ai did not write."""
    if not hook.exists():
        return None

    content = hook.read_text(errors="replace")
    if SIGNATURE in content or content == template.read_text():
        return None

    backup = hook.with_name(hook.name + BACKUP_SUFFIX)
    if backup.exists():
        logger.warning(f"Overwriting {hook}, backup {backup} already exists")
        return None

    shutil.copy2(hook, backup)
    logger.warning(f"Existing {hook.name} hook saved as {backup}")
    return backup


def install_hooks(
    repo: GitRepository, templates_dir: Optional[Path] = None
) -> list[Path]:
    """Copy the hook templates into the repository's hooks directory.

    Running it again overwrites the hooks with identical content.

    Args:
        repo: Repository to install into.
        templates_dir: Directory holding the templates (defaults to the
            ones shipped with git-ai).

    Returns:
        Paths of the installed hook files.

    Raises:
        InstallationFailure: If a template is missing or an installed file
            is absent or not executable afterwards.
    """
    templates_dir = templates_dir or TEMPLATES_DIR
    templates = [templates_dir / name for name in HOOK_FILES]

    for template in templates:
        if not template.is_file():
            raise InstallationFailure(f"Template not found: {template}")

    hooks_dir = repo.hooks_dir()
    logger.info(f"Hooks directory: {hooks_dir}")
    hooks_dir.mkdir(parents=True, exist_ok=True)

    _backup_foreign_hook(hooks_dir / COMMIT_MSG_HOOK, templates[0])

    installed = []
    for template in templates:
        target = hooks_dir / template.name
        try:
            shutil.copyfile(template, target)
            target.chmod(EXECUTABLE)
        except OSError as e:
            raise InstallationFailure(f"Could not install {target}: {e}") from e
        logger.info(f"Installed {target}")
        installed.append(target)

    for target in installed:
        if not target.is_file():
            raise InstallationFailure(f"Hook missing after installation: {target}")
        if not _is_executable(target):
            raise InstallationFailure(f"Hook installed but not executable: {target}")

    return installed
