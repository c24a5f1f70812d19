from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from rest_framework.authtoken.models import Token

from games.models import Game
from games.slugs import unique_game_slug
from reviews.models import Review

GUESTS = [
    {"email": "andrey@example.com", "name": "Andrey", "password": "guest-pass-2024"},
    {"email": "kevin@example.com", "name": "Kevin", "password": "guest-pass-2024"},
]

GAMES = [
    {
        "title": "The Legend of Zelda: Breath of the Wild",
        "genre": ["Adventure", "Open World"],
        "platform": ["Nintendo Switch", "Wii U"],
    },
    {"title": "Hollow Knight", "genre": ["Metroidvania"], "platform": ["PC", "Nintendo Switch"]},
    {"title": "Pokémon Rojo Fuego", "genre": ["RPG"], "platform": ["Game Boy Advance"]},
]

# (guest index, game index, rating, content)
REVIEWS = [
    (0, 0, 10, "Pure exploration joy."),
    (1, 0, 9, ""),
    (0, 1, 8, "Hard but fair."),
]


class Command(BaseCommand):
    help = "Create or update demo guest users, a few games and sample reviews."

    def handle(self, *args, **options):
        User = get_user_model()

        users = []
        for cfg in GUESTS:
            u, created = User.objects.get_or_create(
                email=cfg["email"],
                defaults={"name": cfg["name"]},
            )
            if created:
                self.stdout.write(self.style.SUCCESS(f"Created user '{u.email}'"))
            else:
                self.stdout.write(f"User '{u.email}' already exists")

            # set (or reset) password to match the frontend guest login
            u.set_password(cfg["password"])
            u.save(update_fields=["password"])

            token, _ = Token.objects.get_or_create(user=u)
            self.stdout.write(f"  → token={token.key}")
            users.append(u)

        games = []
        for cfg in GAMES:
            game = Game.objects.filter(title__iexact=cfg["title"]).first()
            if game is None:
                game = Game.objects.create(slug=unique_game_slug(cfg["title"]), **cfg)
                self.stdout.write(self.style.SUCCESS(f"Created game '{game.title}' ({game.slug})"))
            games.append(game)

        for user_idx, game_idx, rating, content in REVIEWS:
            Review.objects.get_or_create(
                user=users[user_idx],
                game=games[game_idx],
                defaults={"rating": rating, "content": content},
            )

        self.stdout.write(self.style.SUCCESS("Demo data ready."))
