import uuid

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from games.models import Game
from reviews.models import Review

User = get_user_model()


def make_user(email):
    u = User.objects.create_user(email, "pass1234")
    tok = Token.objects.create(user=u)
    return u, tok


class ReviewDeleteTests(APITestCase):
    def setUp(self):
        self.game = Game.objects.create(title="Hades", slug="hades")
        self.owner, self.owner_tok = make_user("owner@example.com")
        self.other, self.other_tok = make_user("other@example.com")

        self.review = Review.objects.create(game=self.game, user=self.owner, rating=4, content="meh")
        self.url = reverse("review-detail", args=[self.review.id])

    def auth(self, tok):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {tok.key}")

    def test_delete_success_by_owner_204(self):
        self.auth(self.owner_tok)
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Review.objects.filter(id=self.review.id).exists())

    def test_owner_can_review_again_after_delete(self):
        self.auth(self.owner_tok)
        self.client.delete(self.url)
        res = self.client.post(
            reverse("review-list"), {"gameId": str(self.game.id), "rating": 7}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)

    def test_requires_auth_401(self):
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertTrue(Review.objects.filter(id=self.review.id).exists())

    def test_forbidden_if_not_owner_403(self):
        self.auth(self.other_tok)
        res = self.client.delete(self.url)
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Review.objects.filter(id=self.review.id).exists())

    def test_not_found_404(self):
        self.auth(self.owner_tok)
        bad = reverse("review-detail", args=[uuid.uuid4()])
        res = self.client.delete(bad)
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
