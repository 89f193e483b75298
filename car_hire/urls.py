from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("booking.urls")),
    path("", RedirectView.as_view(pattern_name="booking:vehicle_list", permanent=False)),
]
