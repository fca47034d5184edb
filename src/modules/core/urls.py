from django.urls import path

from modules.core.views import ServiceInfoView, health_check

urlpatterns = [
    path("", ServiceInfoView.as_view(), name="service_info"),
    path("health", health_check, name="health_check"),
]
