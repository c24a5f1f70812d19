"""Reviews app models.

Defines the Review model. A user can leave at most one review per game.
Ratings are integers between 1 and 10; content is optional free text and is
stored as NULL when empty or whitespace-only.
"""

import uuid

from django.conf import settings
from django.core.validators import MaxLengthValidator, MaxValueValidator, MinValueValidator
from django.db import models

from games.models import Game

MIN_RATING = 1
MAX_RATING = 10
MAX_CONTENT_LENGTH = 1000


def normalize_content(value):
    """Trim *value*; empty or whitespace-only content becomes ``None``."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class Review(models.Model):
    """A user's rating of a game, with optional written content."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    game = models.ForeignKey(
        Game,
        on_delete=models.CASCADE,
        related_name="reviews",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reviews",
    )

    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)]
    )
    content = models.TextField(
        blank=True, null=True, validators=[MaxLengthValidator(MAX_CONTENT_LENGTH)]
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "game"],
                name="unique_review_per_user_and_game",
            ),
            models.CheckConstraint(
                condition=models.Q(rating__gte=MIN_RATING) & models.Q(rating__lte=MAX_RATING),
                name="review_rating_between_1_and_10",
            ),
        ]
        ordering = ("-created_at",)

    def save(self, *args, **kwargs):
        self.content = normalize_content(self.content)
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Review<{self.id} {self.user_id}->{self.game_id} {self.rating}>"
