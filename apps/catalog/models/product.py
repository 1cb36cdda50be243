from django.db import models
from django.utils.text import slugify
from simple_history.models import HistoricalRecords

from apps.catalog.choices import EventStatus, ProductStatus


class Product(models.Model):
    """
    Base product sold by a brand.
    Purchasable SKUs are its classifications; a product without an
    attribute matrix has a single DEFAULT classification.
    """
    brand = models.ForeignKey(
        'catalog.Brand',
        on_delete=models.CASCADE,
        related_name='products',
        verbose_name='Marca'
    )
    name = models.CharField(
        max_length=255,
        verbose_name='Nome'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        verbose_name='Slug'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    status = models.CharField(
        max_length=20,
        choices=ProductStatus.choices,
        default=ProductStatus.OFFICIAL,
        verbose_name='Status'
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['name']
        verbose_name = 'Produto'
        verbose_name_plural = 'Produtos'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    @property
    def classification_count(self):
        return self.classifications.count()

    @property
    def active_flash_sale(self):
        return self.product_discounts.filter(status=EventStatus.ACTIVE).first()

    def get_classification_snapshots(self):
        """Engine records for every classification of the product."""
        classifications = self.classifications.select_related(
            'product_discount', 'pre_order_product'
        ).prefetch_related('images')
        return [c.to_snapshot() for c in classifications]
