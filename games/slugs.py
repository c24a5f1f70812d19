"""Slug allocation for games.

A slug is derived from the title once, when the game is created: the title
is lowercased, accents are folded to their base letters and every run of
characters outside ``[a-z0-9]`` becomes a single hyphen. When the resulting
base slug is taken, numeric suffixes ``-1``, ``-2``, ... are tried in order.

The existence check is only a fast path. The unique index on ``Game.slug``
stays the source of truth, see ``GameCreateSerializer.create``.
"""

import logging
import re
import unicodedata

from django.conf import settings

from core.exceptions import SlugAllocationError
from games.models import Game

logger = logging.getLogger(__name__)

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")

# Used when a title has no ASCII letters or digits at all (e.g. "!!!").
FALLBACK_SLUG = "game"


def slugify_title(title: str) -> str:
    """Return the base slug for *title*. May be empty."""
    decomposed = unicodedata.normalize("NFD", title.lower())
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM_RUN.sub("-", folded).strip("-")


def allocate_slug(base_slug: str, exists, max_attempts: int = None) -> str:
    """Return the first of ``base``, ``base-1``, ``base-2``, ... that is free.

    *exists* is called with each candidate and must return ``True`` when the
    candidate is already in use. At most *max_attempts* candidates are
    checked (default: ``settings.GAME_SLUG_MAX_ATTEMPTS``); after that
    :class:`~core.exceptions.SlugAllocationError` is raised.
    """
    if max_attempts is None:
        max_attempts = settings.GAME_SLUG_MAX_ATTEMPTS
    base_slug = base_slug or FALLBACK_SLUG

    for attempt in range(max_attempts):
        candidate = f"{base_slug}-{attempt}" if attempt else base_slug
        if not exists(candidate):
            return candidate
        logger.debug("Slug %r already taken", candidate)

    logger.error("No free slug for %r after %d attempts", base_slug, max_attempts)
    raise SlugAllocationError()


def unique_game_slug(title: str) -> str:
    """Allocate a slug for a new game titled *title* against the database."""
    return allocate_slug(
        slugify_title(title),
        lambda candidate: Game.objects.filter(slug=candidate).exists(),
    )
