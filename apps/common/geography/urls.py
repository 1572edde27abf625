"""Common Geography - URL Configuration."""
from django.urls import path
from . import views

app_name = 'geography'

urlpatterns = [
    path('provinces', views.ProvinceListView.as_view(), name='province-list'),
    path('provinces/<int:pk>', views.ProvinceDetailView.as_view(), name='province-detail'),
    path('cities', views.CityListView.as_view(), name='city-list'),
    path('cities/<int:pk>', views.CityDetailView.as_view(), name='city-detail'),
    path('suburbs', views.SuburbListView.as_view(), name='suburb-list'),
    path('districts', views.DistrictListView.as_view(), name='district-list'),
    path('districts/<int:pk>', views.DistrictDetailView.as_view(), name='district-detail'),
    path('settlements', views.SettlementListView.as_view(), name='settlement-list'),
    path('communities', views.CommunityListView.as_view(), name='community-list'),
    path('villages', views.VillageListView.as_view(), name='village-list'),
]
