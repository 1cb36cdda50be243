from django.db import models


class BrandSelection(models.TextChoices):
    """Tri-state of a brand's checkbox in the cart."""
    ALL = 'ALL', 'Todos'
    SOME = 'SOME', 'Alguns'
    NONE = 'NONE', 'Nenhum'


class CheckoutIssueCode(models.TextChoices):
    INSUFFICIENT_STOCK = 'INSUFFICIENT_STOCK', 'Estoque insuficiente'
    SOLD_OUT = 'SOLD_OUT', 'Esgotado'
    NOTHING_SELECTED = 'NOTHING_SELECTED', 'Nenhum item selecionado'
