"""Marketplace Reviews - URL Configuration."""
from django.urls import path
from . import views

app_name = 'reviews'

urlpatterns = [
    path('reviews', views.ReviewListView.as_view(), name='list'),
    path('reviews/<int:pk>', views.ReviewDetailView.as_view(), name='detail'),
    path('reviews/<int:pk>/upload-photo', views.ReviewPhotoUploadView.as_view(), name='upload_photo'),
]
