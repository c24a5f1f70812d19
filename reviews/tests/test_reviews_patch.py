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


class ReviewUpdateTests(APITestCase):
    def setUp(self):
        self.game = Game.objects.create(title="Hades", slug="hades")
        self.other_game = Game.objects.create(title="Celeste", slug="celeste")
        self.owner, self.owner_tok = make_user("owner@example.com")
        self.other, self.other_tok = make_user("other@example.com")

        self.review = Review.objects.create(
            game=self.game, user=self.owner, rating=6, content="ok"
        )
        self.url = reverse("review-detail", args=[self.review.id])

    def auth(self, tok):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {tok.key}")

    def assertUnchanged(self):
        self.review.refresh_from_db()
        self.assertEqual(self.review.rating, 6)
        self.assertEqual(self.review.content, "ok")
        self.assertEqual(self.review.game, self.game)

    def test_owner_can_put_rating_and_content(self):
        self.auth(self.owner_tok)
        created_at = self.review.created_at
        res = self.client.put(self.url, {"rating": 8, "content": "Grew on me."}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["id"], str(self.review.id))
        self.assertEqual(res.data["rating"], 8)
        self.assertEqual(res.data["content"], "Grew on me.")
        self.review.refresh_from_db()
        self.assertEqual(self.review.created_at, created_at)
        self.assertGreaterEqual(self.review.updated_at, created_at)

    def test_put_requires_rating(self):
        self.auth(self.owner_tok)
        res = self.client.put(self.url, {"content": "no rating"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("rating", res.data["details"])
        self.assertUnchanged()

    def test_put_without_content_clears_it(self):
        self.auth(self.owner_tok)
        res = self.client.put(self.url, {"rating": 7}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNone(res.data["content"])

    def test_patch_rating_only_keeps_content(self):
        self.auth(self.owner_tok)
        res = self.client.patch(self.url, {"rating": 10}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["rating"], 10)
        self.assertEqual(res.data["content"], "ok")

    def test_whitespace_content_becomes_absent(self):
        self.auth(self.owner_tok)
        res = self.client.patch(self.url, {"content": "   "}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNone(res.data["content"])
        self.review.refresh_from_db()
        self.assertIsNone(self.review.content)

    def test_requires_auth_401(self):
        res = self.client.patch(self.url, {"rating": 4}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertUnchanged()

    def test_forbidden_if_not_owner_403(self):
        self.auth(self.other_tok)
        for method in (self.client.put, self.client.patch):
            res = method(self.url, {"rating": 1}, format="json")
            self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
            self.assertEqual(res.data["error"], "You can only modify your own reviews.")
        self.assertUnchanged()

    def test_invalid_rating_400(self):
        self.auth(self.owner_tok)
        for rating in (0, 11, 3.5, "8"):
            res = self.client.patch(self.url, {"rating": rating}, format="json")
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST, rating)
        self.assertUnchanged()

    def test_game_cannot_be_changed(self):
        self.auth(self.owner_tok)
        res = self.client.put(
            self.url, {"rating": 5, "gameId": str(self.other_game.id)}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("gameId", res.data["error"])
        self.assertUnchanged()

    def test_not_found_404(self):
        self.auth(self.owner_tok)
        bad = reverse("review-detail", args=[uuid.uuid4()])
        res = self.client.patch(bad, {"rating": 4}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_non_object_body_400(self):
        self.auth(self.owner_tok)
        for body in ([1, 2], 5, "rating"):
            res = self.client.patch(self.url, body, format="json")
            self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST, body)
            self.assertEqual(res.data["error"], "Expected a JSON object.")
        self.assertUnchanged()

    def test_ownership_checked_before_field_whitelist(self):
        self.auth(self.other_tok)
        res = self.client.patch(
            self.url, {"rating": 1, "gameId": str(self.other_game.id)}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertUnchanged()

    def test_unknown_id_with_extra_field_404(self):
        self.auth(self.owner_tok)
        bad = reverse("review-detail", args=[uuid.uuid4()])
        res = self.client.patch(bad, {"rating": 4, "gameId": "x"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_padded_content_length_counts_trimmed_text(self):
        self.auth(self.owner_tok)
        res = self.client.patch(self.url, {"content": " " * 1001}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIsNone(res.data["content"])

        text = "x" * 1000
        res = self.client.patch(self.url, {"content": f"  {text}  "}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["content"], text)

        res = self.client.patch(self.url, {"content": "x" * 1001}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("content", res.data["details"])
