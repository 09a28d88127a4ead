from django.urls import path

from . import views

app_name = "Movies"

urlpatterns = [
    path("account/denied/", views.access_denied, name="access_denied"),
    path("api/authorization/health/", views.authorization_health, name="authorization_health"),
]
