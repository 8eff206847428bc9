from django.urls import include, path

urlpatterns = [
    path("api/", include("rail_rest.http.urls")),
]
