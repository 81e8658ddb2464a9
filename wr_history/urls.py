from django.urls import path

from .views import wr_maps, wr_timeline

urlpatterns = [
    path("maps", wr_maps, name="wr_maps"),
    path("timeline", wr_timeline, name="wr_timeline"),
]
