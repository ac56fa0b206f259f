"""
URL configuration for the backend.
"""

from django.contrib import admin
from django.urls import path

from apps.conversations.webhook import chat_webhook

from .api import api

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/", api.urls),
    # Chat webhook - outside Django Ninja for raw request handling
    path("webhooks/chat/", chat_webhook, name="chat-webhook"),
]
