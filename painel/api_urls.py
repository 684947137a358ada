# painel/api_urls.py
from django.urls import path
from . import api

app_name = "painel"

urlpatterns = [
    path("metrics/", api.DashboardMetrics.as_view(), name="metrics"),
    path("ranking/", api.DashboardRanking.as_view(), name="ranking"),
]
