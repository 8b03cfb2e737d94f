"""
git-ai - Track AI-assisted commits.

Tags commits with an [AI] marker at commit time and reports how many
commits in a branch, tag, or range were written with AI assistance.
"""

__version__ = "0.1.0"
__author__ = "git-ai"
