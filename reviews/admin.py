from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """
    Review moderation list: who rated which game, filterable by rating.
    """
    list_display = ("id", "game", "user", "rating", "created_at", "updated_at")
    list_select_related = ("game", "user")
    search_fields = ("game__title", "user__email", "user__name", "content")
    list_filter = ("rating", "created_at")
    ordering = ("-created_at",)
    readonly_fields = ("id", "created_at", "updated_at")
    autocomplete_fields = ("game", "user")
