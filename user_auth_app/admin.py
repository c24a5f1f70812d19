from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.db.models import Count

from .models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    """
    User list keyed by email, with review count and admin flags.
    """
    list_display = (
        "id",
        "email",
        "name",
        "review_count_display",
        "is_staff",
        "is_active",
        "date_joined",
        "last_login",
    )
    ordering = ("-date_joined", "-id")
    search_fields = ("email", "name")
    list_filter = ("is_staff", "is_superuser", "is_active")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "avatar")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "name", "password1", "password2")}),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_review_count=Count("reviews"))

    def review_count_display(self, obj):
        return getattr(obj, "_review_count", 0)
    review_count_display.short_description = "reviews"
    review_count_display.admin_order_field = "_review_count"
