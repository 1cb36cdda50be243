from django.apps import AppConfig


class VouchersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.vouchers'
    verbose_name = 'Cupons'
