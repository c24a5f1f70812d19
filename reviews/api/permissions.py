"""Reviews API permissions.

Object-level permission for review endpoints. Ownership is decided by the
stored ``user_id`` of the review, never by anything the client sends.
"""

from rest_framework.permissions import BasePermission


class IsReviewOwner(BasePermission):
    """Allow modifications or deletion only by the review owner."""

    message = "You can only modify your own reviews."

    def has_object_permission(self, request, view, obj):
        user = request.user
        return bool(user and user.is_authenticated and obj.user_id == user.id)
