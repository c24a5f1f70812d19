from django.contrib import admin
from django.db.models import Avg, Count

from .models import Game
from .slugs import unique_game_slug


@admin.register(Game)
class GameAdmin(admin.ModelAdmin):
    """
    Catalog management:
    - average rating and review count as columns
    - slug is allocated on creation and read-only afterwards
    """
    list_display = (
        "title",
        "slug",
        "release_date",
        "average_rating_display",
        "review_count_display",
        "created_at",
    )
    search_fields = ("title", "slug", "description")
    list_filter = ("release_date", "created_at")
    date_hierarchy = "created_at"
    ordering = ("title",)
    readonly_fields = ("id", "slug", "created_at", "updated_at")

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(_average_rating=Avg("reviews__rating"), _review_count=Count("reviews"))

    def save_model(self, request, obj, form, change):
        if not change:
            obj.slug = unique_game_slug(obj.title)
        super().save_model(request, obj, form, change)

    def average_rating_display(self, obj):
        v = getattr(obj, "_average_rating", None)
        return f"{v:.1f}" if v is not None else "-"
    average_rating_display.short_description = "avg rating"
    average_rating_display.admin_order_field = "_average_rating"

    def review_count_display(self, obj):
        return getattr(obj, "_review_count", 0)
    review_count_display.short_description = "reviews"
    review_count_display.admin_order_field = "_review_count"
