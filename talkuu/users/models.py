from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import CharField
from django.db.models import EmailField
from django.db.models import URLField
from django.utils.translation import gettext_lazy as _


class User(AbstractUser):
    """
    Default custom user model for Talkuu.

    Only the fields the messaging flow reads are declared here; profile
    editing and media upload live outside this service.
    """

    email = EmailField(_("email address"), unique=True)
    # Redeclared so the projection fields stay explicit on this model.
    first_name = CharField(_("First Name"), max_length=150, blank=True)
    last_name = CharField(_("Last Name"), max_length=150, blank=True)
    # Hosted avatar URL (uploads go straight to the media host)
    profile_picture = URLField(_("Profile Picture"), max_length=500, blank=True)
    # Audit timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self) -> str:
        return self.full_name or self.username
