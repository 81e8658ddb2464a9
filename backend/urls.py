from django.urls import include, path

urlpatterns = [
    path("api/", include("wr_history.urls")),
]
