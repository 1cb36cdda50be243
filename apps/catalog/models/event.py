from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from decimal import Decimal

from apps.catalog.choices import EventStatus


class ProductDiscount(models.Model):
    """
    Flash sale on a product. While ACTIVE, the classifications linked to it
    sell at ``price * (1 - discount)``.
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='product_discounts',
        verbose_name='Produto'
    )
    discount = models.DecimalField(
        max_digits=4,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('1'))],
        verbose_name='Desconto',
        help_text='Fração entre 0 e 1 (0.2 = 20%)'
    )
    status = models.CharField(
        max_length=20,
        choices=EventStatus.choices,
        default=EventStatus.WAITING,
        verbose_name='Status'
    )
    start_time = models.DateTimeField(
        verbose_name='Início'
    )
    end_time = models.DateTimeField(
        verbose_name='Fim'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )

    class Meta:
        ordering = ['-start_time']
        verbose_name = 'Oferta Relâmpago'
        verbose_name_plural = 'Ofertas Relâmpago'

    def __str__(self):
        return f"{self.product.name} - {self.discount * 100:.0f}%"


class PreOrderProduct(models.Model):
    """Pre-order campaign for a product."""
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='pre_order_products',
        verbose_name='Produto'
    )
    status = models.CharField(
        max_length=20,
        choices=EventStatus.choices,
        default=EventStatus.WAITING,
        verbose_name='Status'
    )
    start_time = models.DateTimeField(
        verbose_name='Início'
    )
    end_time = models.DateTimeField(
        verbose_name='Fim'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )

    class Meta:
        ordering = ['-start_time']
        verbose_name = 'Pré-venda'
        verbose_name_plural = 'Pré-vendas'

    def __str__(self):
        return f"{self.product.name} - pré-venda"
