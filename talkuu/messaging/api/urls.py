from django.urls import path

from .views import ConversationReadView
from .views import ConversationView

urlpatterns = [
    path("<int:user_id>/", ConversationView.as_view(), name="conversation"),
    path(
        "<int:user_id>/read/",
        ConversationReadView.as_view(),
        name="conversation-read",
    ),
]
