from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.cart.services.lines import CartLine


class CartItem(models.Model):
    """One classification in a customer's cart."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='cart_items',
        verbose_name='Cliente'
    )
    classification = models.ForeignKey(
        'catalog.Classification',
        on_delete=models.CASCADE,
        related_name='cart_items',
        verbose_name='Variação'
    )
    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
        verbose_name='Quantidade'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Adicionado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    class Meta:
        ordering = ['-created_at', '-pk']
        unique_together = ['user', 'classification']
        verbose_name = 'Item do Carrinho'
        verbose_name_plural = 'Itens do Carrinho'

    def __str__(self):
        return f"{self.classification} x{self.quantity}"

    def to_line(self, siblings=None):
        """
        Engine record for this row. ``siblings`` are the snapshots of every
        classification of the product; loaded when not given.
        """
        classification = self.classification
        product = classification.product
        if siblings is None:
            siblings = product.get_classification_snapshots()
        return CartLine(
            id=self.pk,
            classification=classification.to_snapshot(),
            quantity=self.quantity,
            brand_id=product.brand_id,
            product_id=product.pk,
            product_name=product.name,
            product_status=product.status,
            siblings=tuple(siblings),
        )
