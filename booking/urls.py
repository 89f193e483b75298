from django.urls import path

from . import views

app_name = "booking"

urlpatterns = [
    path("vehicles/", views.vehicle_list, name="vehicle_list"),
    path("vehicles/<int:pk>/quote/", views.vehicle_quote, name="vehicle_quote"),
    path("reservations/", views.reservation_create, name="reservation_create"),
    path("admin/pricing-preview/", views.pricing_preview, name="pricing_preview"),
    path("blog/", views.blog_list, name="blog_list"),
    path("blog/<slug:slug>/", views.blog_detail, name="blog_detail"),
]
