"""System prompt for the terminal assistant.

The prompt is a short preamble followed by a markdown file describing the
site owner (bio, skills, projects). Edit the markdown, not this module.
"""

import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path

from portfolio_ai.errors import ConfigurationError

logger = logging.getLogger(__name__)

_PREAMBLE = "You are an AI assistant embedded in {owner}'s personal portfolio website terminal."


def load_context(path: str = "") -> str:
    if path:
        return Path(path).read_text(encoding="utf-8")
    return resources.files("portfolio_ai").joinpath("data/ai-context.md").read_text(encoding="utf-8")


def build_system_prompt(owner: str, context: str) -> str:
    return f"{_PREAMBLE.format(owner=owner)}\n\n{context}"


@lru_cache(maxsize=4)
def get_system_prompt(owner: str, context_path: str = "") -> str:
    """Build the prompt once per (owner, context file).

    An unreadable context file is a deployment problem: it is logged with its
    path and surfaced as ``ConfigurationError`` without the path.
    """
    try:
        context = load_context(context_path)
    except OSError:
        logger.exception("Cannot read AI context file %r", context_path)
        raise ConfigurationError(
            f"AI chat is not configured. Contact {owner} for more information."
        ) from None
    return build_system_prompt(owner, context)
