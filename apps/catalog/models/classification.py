from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
from simple_history.models import HistoricalRecords
from imagekit.models import ProcessedImageField, ImageSpecField
from imagekit.processors import ResizeToFill, ResizeToFit

from apps.catalog.choices import (
    ClassificationStatus,
    ClassificationType,
    EventKind,
)
from apps.catalog.services.snapshots import (
    ClassificationData,
    EventData,
    clean_attribute_value,
)


class Classification(models.Model):
    """
    Individual SKU of a product: one color/size/other combination with its
    own price and stock.
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='classifications',
        verbose_name='Produto'
    )
    title = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Título'
    )
    type = models.CharField(
        max_length=10,
        choices=ClassificationType.choices,
        default=ClassificationType.CUSTOM,
        verbose_name='Tipo'
    )

    # Attribute combination
    color = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Cor'
    )
    size = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Tamanho'
    )
    other = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Outro'
    )

    # Pricing & inventory
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Preço'
    )
    quantity = models.IntegerField(
        default=0,
        verbose_name='Quantidade em estoque'
    )
    status = models.CharField(
        max_length=10,
        choices=ClassificationStatus.choices,
        default=ClassificationStatus.ACTIVE,
        verbose_name='Status'
    )

    # Event participation
    product_discount = models.ForeignKey(
        'catalog.ProductDiscount',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='classifications',
        verbose_name='Oferta relâmpago'
    )
    pre_order_product = models.ForeignKey(
        'catalog.PreOrderProduct',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='classifications',
        verbose_name='Pré-venda'
    )
    event_quantity = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Estoque do evento',
        help_text='Estoque reservado para a pré-venda / oferta (vazio = estoque próprio)'
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
        ordering = ['product', 'price', 'pk']
        verbose_name = 'Variação'
        verbose_name_plural = 'Variações'

    def __str__(self):
        return self.title or self.label or f"{self.product.name} #{self.pk}"

    def save(self, *args, **kwargs):
        if not self.title:
            self.title = self.label
        super().save(*args, **kwargs)

    @property
    def label(self):
        return ', '.join(v for v in (self.color, self.size, self.other) if v)

    @property
    def primary_image(self):
        # iterate so a prefetch_related('images') is honoured
        for image in self.images.all():
            if image.is_active:
                return image
        return None

    def get_pre_order_snapshot(self):
        if not self.pre_order_product_id:
            return None
        return EventData(
            kind=EventKind.PRE_ORDER,
            status=self.pre_order_product.status,
            quantity=self.event_quantity,
        )

    def get_product_discount_snapshot(self):
        if not self.product_discount_id:
            return None
        return EventData(
            kind=EventKind.FLASH_SALE,
            status=self.product_discount.status,
            discount=self.product_discount.discount,
            quantity=self.event_quantity,
        )

    def to_snapshot(self):
        image = self.primary_image
        return ClassificationData(
            id=self.pk,
            title=self.title,
            color=clean_attribute_value(self.color),
            size=clean_attribute_value(self.size),
            other=clean_attribute_value(self.other),
            price=self.price,
            quantity=self.quantity,
            status=self.status,
            type=self.type,
            pre_order=self.get_pre_order_snapshot(),
            product_discount=self.get_product_discount_snapshot(),
            image_url=image.image.url if image and image.image else None,
        )


class ClassificationImage(models.Model):
    """Images for each classification with automatic thumbnail generation."""
    classification = models.ForeignKey(
        Classification,
        on_delete=models.CASCADE,
        related_name='images',
        verbose_name='Variação'
    )
    image = ProcessedImageField(
        upload_to='classifications/%Y/%m/',
        processors=[ResizeToFit(1200, 1200)],
        format='JPEG',
        options={'quality': 85},
        verbose_name='Imagem'
    )
    thumbnail = ImageSpecField(
        source='image',
        processors=[ResizeToFill(300, 300)],
        format='JPEG',
        options={'quality': 70}
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )

    class Meta:
        ordering = ['display_order']
        verbose_name = 'Imagem da Variação'
        verbose_name_plural = 'Imagens das Variações'

    def __str__(self):
        return f"{self.classification} - Imagem {self.display_order}"
