from django.urls import path

from . import views


app_name = "startups"

urlpatterns = [
    path("", views.home, name="home"),
    path("startup/<str:startup_id>/", views.startup_detail, name="startup_detail"),
    path("startup/<str:startup_id>/views/", views.startup_views, name="startup_views"),
    path("user/<str:author_id>/", views.user_profile, name="user_profile"),
]
