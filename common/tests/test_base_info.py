from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from games.models import Game
from reviews.models import Review


User = get_user_model()


class BaseInfoAPITests(TestCase):
    """
    Tests for GET /api/base-info/

    Requirements:
    - No authentication required (AllowAny).
    - Returns counts for games, reviews and users.
    - Returns average rating rounded to 1 decimal; null if no reviews.
    """

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("base-info")

    def test_public_access_allowed_200(self):
        """Endpoint must be publicly accessible and return 200."""
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, 200)
        for key in ("gameCount", "reviewCount", "userCount", "averageRating"):
            self.assertIn(key, res.data)

    def test_no_data_returns_zeros_and_null_average(self):
        """With no rows in DB, counters are zero and averageRating is null, not 0."""
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["gameCount"], 0)
        self.assertEqual(res.data["reviewCount"], 0)
        self.assertEqual(res.data["userCount"], 0)
        self.assertIsNone(res.data["averageRating"])

    def test_counts_and_rounded_average(self):
        """Average of [7, 8, 8] is 7.67, reported as 7.7."""
        zelda = Game.objects.create(title="Zelda", slug="zelda")
        Game.objects.create(title="Metroid", slug="metroid")
        users = [
            User.objects.create_user(email=f"u{i}@example.com", password="x") for i in range(3)
        ]
        for user, rating in zip(users, (7, 8, 8)):
            Review.objects.create(game=zelda, user=user, rating=rating)

        res = self.client.get(self.url)
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["gameCount"], 2)
        self.assertEqual(res.data["reviewCount"], 3)
        self.assertEqual(res.data["userCount"], 3)
        self.assertEqual(res.data["averageRating"], 7.7)
