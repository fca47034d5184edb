from django.apps import AppConfig
from django.db.backends.signals import connection_created


class ProductsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.products"
    label = "products"

    def ready(self) -> None:
        from modules.products.queries import register_sqlite_functions

        connection_created.connect(
            register_sqlite_functions, dispatch_uid="products.sqlite_functions"
        )
