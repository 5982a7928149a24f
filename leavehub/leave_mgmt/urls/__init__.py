# leave_mgmt/urls/__init__.py
from django.urls import path, include

urlpatterns = [
    path("stats/", include("leave_mgmt.urls.stats_urls")),
]
