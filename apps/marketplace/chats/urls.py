"""Marketplace Chats - URL Configuration."""
from django.urls import path
from . import views

app_name = 'chats'

urlpatterns = [
    path('chats', views.ChatListView.as_view(), name='list'),
    path('chats/<int:pk>', views.ChatDetailView.as_view(), name='detail'),
]
