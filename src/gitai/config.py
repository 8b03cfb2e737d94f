"""Settings read from the environment and git config."""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from gitai.vcs.git import GitRepository

logger = logging.getLogger(__name__)

TRUE_WORDS = {"y", "yes", "1", "true", "on"}
FALSE_WORDS = {"n", "no", "0", "false", "off"}

# field -> (environment variable, git config key)
SOURCES = {
    "default_base": ("GIT_AI_BASE", "ai.base"),
    "hook_answer": ("GIT_AI", "ai.answer"),
    "recent_limit": ("GIT_AI_LIMIT", "ai.limit"),
}


class Settings(BaseModel):
    """Runtime settings for git-ai.

    Environment variables take precedence over git config keys.
    """

    default_base: Optional[str] = None
    hook_answer: Optional[bool] = None
    recent_limit: int = Field(default=10, ge=0)

    @field_validator("default_base", mode="before")
    @classmethod
    def validate_default_base(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("hook_answer", mode="before")
    @classmethod
    def validate_hook_answer(cls, v: object) -> Optional[bool]:
        """Accept yes/no style words for the hook answer override."""
        if v is None or isinstance(v, bool):
            return v
        word = str(v).strip().lower()
        if not word:
            return None
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
        raise ValueError(f"Expected yes or no, got {v!r}")

    @classmethod
    def load(
        cls,
        repo: Optional[GitRepository] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """Build settings from environment variables and git config.

        Args:
            repo: Repository whose git config is consulted (skipped if None).
            environ: Environment mapping (defaults to os.environ).

        Returns:
            Validated settings.
        """
        environ = os.environ if environ is None else environ
        values = {}

        for name, (env_var, config_key) in SOURCES.items():
            value = environ.get(env_var)
            if value is None and repo is not None:
                value = repo.config_get(config_key)
            if value is not None:
                logger.debug(f"Setting {name}={value!r}")
                values[name] = value

        return cls(**values)
