from django.apps import AppConfig


class CartConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.cart'
    verbose_name = 'Carrinho'

    def ready(self):
        # connect signal receivers
        from apps.cart import receivers  # noqa: F401
