"""Marketplace Appeals - URL Configuration."""
from django.urls import path
from . import views

app_name = 'appeals'

urlpatterns = [
    path('appeals', views.AppealListView.as_view(), name='list'),
    path('appeals/reasons', views.ComplaintReasonListView.as_view(), name='reasons'),
    path('appeals/<int:pk>/upload-photo', views.AppealPhotoUploadView.as_view(), name='upload_photo'),
]
