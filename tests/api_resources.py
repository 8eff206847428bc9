"""
Explicit registrations picked up by ``rail_rest`` app discovery.
"""

from rail_rest import ApiMeta, metadata_registry

from .entities import Warehouse

metadata_registry.register(
    Warehouse,
    resource=ApiMeta.Resource(operations=["GET", "POST"], pagination_enabled=False),
    properties={
        "code": ApiMeta.Property(required=True, description="Warehouse code"),
        "capacity": ApiMeta.Property(type="integer"),
    },
    filters=[ApiMeta.Filter("search", ["code"], {"strategy": "exact"})],
)
