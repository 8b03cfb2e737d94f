"""Git hook integration: the commit-msg interceptor and its installer."""

from gitai.hooks.installer import install_hooks
from gitai.hooks.interceptor import intercept

__all__ = [
    "install_hooks",
    "intercept",
]
