"""Users Lists - URL Configuration."""
from django.urls import path
from . import views

app_name = 'lists'

urlpatterns = [
    # Blacklists
    path('black-lists/me', views.BlackListMeView.as_view(), name='blacklist_me'),
    path('black-lists', views.BlackListCreateView.as_view(), name='blacklist_create'),
    path('black-lists/<int:pk>', views.BlackListDetailView.as_view(), name='blacklist_detail'),

    # Favorites
    path('favorites/me', views.FavoriteMeView.as_view(), name='favorite_me'),
    path('favorites', views.FavoriteCreateView.as_view(), name='favorite_create'),
    path('favorites/<int:pk>', views.FavoriteDetailView.as_view(), name='favorite_detail'),
]
