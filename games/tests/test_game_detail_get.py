from datetime import timedelta

from django.contrib.auth import get_user_model
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from games.models import Game
from reviews.models import Review

User = get_user_model()


class GameDetailTests(APITestCase):
    def setUp(self):
        self.game = Game.objects.create(title="Hollow Knight", slug="hollow-knight")
        self.url = reverse("game-detail", args=[self.game.slug])

    def make_review(self, email, rating, content=None):
        user = User.objects.create_user(email, "pass1234", name=email.split("@")[0])
        return Review.objects.create(game=self.game, user=user, rating=rating, content=content)

    def test_detail_with_stats_and_reviews(self):
        for i, rating in enumerate((7, 9, 9, 10)):
            self.make_review(f"p{i}@example.com", rating, content=f"take {i}")

        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["slug"], "hollow-knight")
        stats = res.data["stats"]
        self.assertEqual(stats["count"], 4)
        self.assertEqual(stats["average"], 8.75)
        self.assertEqual(stats["distribution"], [0, 0, 0, 0, 0, 0, 1, 0, 2, 1])
        self.assertEqual(stats["tier"], "Excellent")
        self.assertEqual(res.data["averageRating"], 8.75)
        self.assertEqual(res.data["reviewCount"], 4)

        self.assertEqual(len(res.data["reviews"]), 4)
        first = res.data["reviews"][0]
        self.assertEqual(first["game"]["slug"], "hollow-knight")
        self.assertIn("name", first["user"])
        self.assertNotIn("email", first["user"])

    def test_reviews_are_newest_first(self):
        older = self.make_review("old@example.com", 5)
        newer = self.make_review("new@example.com", 6)
        Review.objects.filter(pk=older.pk).update(created_at=timezone.now() - timedelta(days=1))
        res = self.client.get(self.url)
        ids = [r["id"] for r in res.data["reviews"]]
        self.assertEqual(ids, [str(newer.id), str(older.id)])

    def test_detail_without_reviews_has_no_average(self):
        res = self.client.get(self.url)
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(
            res.data["stats"],
            {"count": 0, "average": None, "distribution": [0] * 10, "tier": None},
        )
        self.assertIsNone(res.data["averageRating"])
        self.assertEqual(res.data["reviews"], [])

    def test_unknown_slug_404(self):
        res = self.client.get(reverse("game-detail", args=["no-such-game"]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn("error", res.data)
