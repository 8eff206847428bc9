from django.db import models

from rail_rest import ApiMeta


class ShopCategory(models.Model):
    name = models.CharField(max_length=120)

    class Meta:
        app_label = "tests"

    class ApiMeta(ApiMeta):
        resource = ApiMeta.Resource(operations=["GET"])


class ShopProduct(models.Model):
    name = models.CharField(max_length=200, help_text="Display name")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    stock = models.PositiveIntegerField(default=0)
    active = models.BooleanField(default=True)
    published_at = models.DateTimeField(null=True, blank=True)
    release_date = models.DateField(null=True, blank=True)
    category = models.ForeignKey(
        ShopCategory,
        on_delete=models.CASCADE,
        related_name="products",
        null=True,
    )

    class Meta:
        app_label = "tests"
        ordering = ["id"]

    class ApiMeta(ApiMeta):
        resource = ApiMeta.Resource(items_per_page=50)
        properties = {"name": ApiMeta.Property(required=True)}
        filters = [
            ApiMeta.Filter("search", ["name"]),
            ApiMeta.Filter("range", ["price", "stock"]),
            ApiMeta.Filter("date", ["published_at", "release_date"]),
            ApiMeta.Filter("boolean", ["active"]),
            ApiMeta.Filter("order", ["name", "price"]),
        ]
