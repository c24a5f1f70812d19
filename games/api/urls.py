from django.urls import path
from .views import GameDetailAPIView, GameListCreateAPIView

urlpatterns = [
    path("games/", GameListCreateAPIView.as_view(), name="game-list"),
    path("games/<str:slug>/", GameDetailAPIView.as_view(), name="game-detail"),
]
