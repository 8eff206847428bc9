"""
URL patterns for the documentation endpoints.

Include them in a project with ``path("api/", include("rail_rest.http.urls"))``.
"""

from django.urls import path

from .views import OpenAPISchemaView

app_name = "rail_rest"

urlpatterns = [
    path("schema/", OpenAPISchemaView.as_view(), name="openapi-schema"),
    path(
        "schema/<str:resource_name>/",
        OpenAPISchemaView.as_view(),
        name="openapi-schema-resource",
    ),
]
