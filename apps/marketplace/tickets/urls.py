"""Marketplace Tickets - URL Configuration."""
from django.urls import path
from . import views

app_name = 'tickets'

urlpatterns = [
    path('tickets', views.TicketListView.as_view(), name='list'),
    path('tickets/<int:pk>', views.TicketDetailView.as_view(), name='detail'),
    path('tickets/<int:pk>/upload-photo', views.TicketPhotoUploadView.as_view(), name='upload_photo'),

    # Catalog
    path('categories', views.CategoryListView.as_view(), name='categories'),
    path('occupations', views.OccupationListView.as_view(), name='occupations'),
    path('units', views.UnitListView.as_view(), name='units'),
]
