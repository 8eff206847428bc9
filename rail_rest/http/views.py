"""
Documentation endpoints.

Serves the generated OpenAPI document as JSON, for every resource or for a
single one selected by name.
"""

import logging
from typing import Optional

from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from ..core.registry import metadata_registry
from ..exceptions import NotFoundError, RailRestError, problem_response
from ..schema import SchemaGenerator

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class BaseAPIView(View):
    """Base view rendering ``RailRestError`` as problem details."""

    def dispatch(self, request: HttpRequest, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except RailRestError as exc:
            logger.info("%s %s failed: %s", request.method, request.path, exc)
            return problem_response(exc, instance=request.path)


class OpenAPISchemaView(BaseAPIView):
    """
    GET the OpenAPI document.

    ``/schema/`` documents every known resource; ``/schema/<name>/`` and
    ``?resource=<name>`` narrow it to one resource. Unknown names answer 404.
    """

    http_method_names = ["get", "options"]

    def get(self, request: HttpRequest, resource_name: Optional[str] = None):
        generator = SchemaGenerator()
        name = resource_name or request.GET.get("resource")
        resource_types = None
        if name:
            entity_class = metadata_registry.find(name, generator.settings.resources)
            if entity_class is None:
                raise NotFoundError(f"Unknown resource '{name}'.", resource=name)
            resource_types = [entity_class]
        document = generator.generate(resource_types)
        return JsonResponse(document, json_dumps_params={"indent": 2})
