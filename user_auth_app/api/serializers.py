"""Auth API serializers.

Provides serializers for provisioning a user, logging in, and reading or
updating the authenticated user's profile (name and avatar). Emails are
unique case-insensitively and stored lowercase.
"""

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

User = get_user_model()


class RegistrationSerializer(serializers.Serializer):
    """Validate and create a new user."""

    email = serializers.EmailField()
    name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    avatar = serializers.URLField(max_length=500, required=False, allow_blank=True, default="")
    password = serializers.CharField(write_only=True, min_length=8)
    repeatedPassword = serializers.CharField(source="repeated_password", write_only=True, min_length=8)

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError(_("Email already in use."))
        return value

    def validate(self, attrs):
        if attrs["password"] != attrs["repeated_password"]:
            raise serializers.ValidationError(
                {"repeatedPassword": _("Passwords do not match.")}
            )
        validate_password(attrs["password"], User(email=attrs["email"], name=attrs.get("name", "")))
        return attrs

    def create(self, validated_data):
        validated_data.pop("repeated_password", None)
        raw_password = validated_data.pop("password")
        return User.objects.create_user(password=raw_password, **validated_data)


class LoginSerializer(serializers.Serializer):
    """Authenticate email/password and attach the user to validated data."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get("request"),
            email=attrs.get("email", "").strip().lower(),
            password=attrs.get("password"),
        )
        if not user:
            raise serializers.ValidationError({"detail": "Invalid credentials."})
        attrs["user"] = user
        return attrs


class CurrentUserSerializer(serializers.ModelSerializer):
    """The authenticated user's identity; only name and avatar are writable."""

    class Meta:
        model = User
        fields = ["id", "email", "name", "avatar"]
        read_only_fields = ["id", "email"]
