"""Games app models.

Defines the Game model. Titles are unique case-insensitively and every game
carries a URL-safe slug derived from its title once, at creation time.
Genre and platform tags are stored as JSON lists.
"""

import uuid

from django.db import models
from django.db.models.functions import Lower


class Game(models.Model):
    """A catalog entry that users can review."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True, editable=False)
    description = models.TextField(blank=True, null=True)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    release_date = models.DateField(blank=True, null=True)
    genre = models.JSONField(default=list, blank=True)
    platform = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(Lower("title"), name="unique_game_title_ci"),
        ]
        ordering = ("title",)

    def __str__(self) -> str:
        return f"{self.title} ({self.slug})"
