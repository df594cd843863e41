from rest_framework import serializers

from talkuu.users.models import User


class UserSummarySerializer(serializers.ModelSerializer[User]):
    """Minimal profile projection attached to messages for client display."""

    firstName = serializers.CharField(source="first_name", read_only=True)  # noqa: N815
    lastName = serializers.CharField(source="last_name", read_only=True)  # noqa: N815
    profilePicture = serializers.CharField(  # noqa: N815
        source="profile_picture",
        read_only=True,
    )

    class Meta:
        model = User
        fields = ["id", "firstName", "lastName", "profilePicture"]
