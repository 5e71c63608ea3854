"""URL configuration for visualization views."""

from __future__ import annotations

from django.urls import path

from visualizations import views

app_name = "visualizations"

urlpatterns = [
    path("api/visualizations/", views.visualization_list, name="visualization_list"),
    path("api/timeline/", views.timeline_layout, name="timeline_layout"),
]
