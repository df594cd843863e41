from django.contrib import admin

from talkuu.messaging import models


@admin.register(models.Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ["id", "sender", "receiver", "message_type", "is_read", "created_at"]
    search_fields = ["content", "sender__username", "receiver__username"]
    list_filter = ["message_type", "is_read", "created_at"]
    raw_id_fields = ["sender", "receiver"]
