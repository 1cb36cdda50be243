from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
from simple_history.models import HistoricalRecords

from apps.catalog.choices import DiscountType
from apps.vouchers.choices import (
    UnavailableReason,
    VoucherApplyType,
    VoucherScope,
    VoucherStatus,
)
from apps.vouchers.services.snapshots import VoucherData


class Voucher(models.Model):
    """
    Discount voucher issued by a brand (applies to that brand's lines) or
    by the platform (applies to the whole order).
    """
    code = models.CharField(
        max_length=50,
        unique=True,
        verbose_name='Código'
    )
    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Nome'
    )
    scope = models.CharField(
        max_length=10,
        choices=VoucherScope.choices,
        default=VoucherScope.BRAND,
        verbose_name='Escopo'
    )
    brand = models.ForeignKey(
        'catalog.Brand',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='vouchers',
        verbose_name='Marca',
        help_text='Obrigatório para cupons de marca'
    )

    # Discount
    discount_type = models.CharField(
        max_length=10,
        choices=DiscountType.choices,
        default=DiscountType.PERCENTAGE,
        verbose_name='Tipo de desconto'
    )
    discount_value = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0'))],
        verbose_name='Valor do desconto',
        help_text='Percentual como fração (0.2 = 20%) ou valor fixo'
    )
    max_discount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name='Desconto máximo'
    )
    min_order_value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name='Pedido mínimo'
    )

    # Applicability
    apply_type = models.CharField(
        max_length=10,
        choices=VoucherApplyType.choices,
        default=VoucherApplyType.ALL,
        verbose_name='Aplicação'
    )
    applicable_classifications = models.ManyToManyField(
        'catalog.Classification',
        blank=True,
        related_name='vouchers',
        verbose_name='Variações aplicáveis'
    )

    # Validity & usage
    start_time = models.DateTimeField(
        verbose_name='Início'
    )
    end_time = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name='Fim'
    )
    quantity = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Quantidade',
        help_text='Limite de usos (vazio = ilimitado)'
    )
    used_count = models.PositiveIntegerField(
        default=0,
        verbose_name='Usos'
    )
    claimed_by = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name='claimed_vouchers',
        verbose_name='Resgatado por'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Ativo'
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
        ordering = ['end_time', 'pk']
        verbose_name = 'Cupom'
        verbose_name_plural = 'Cupons'

    def __str__(self):
        return self.name or self.code

    @property
    def is_out_of_stock(self):
        return self.quantity is not None and self.used_count >= self.quantity

    def to_snapshot(self, claimed=False):
        """
        Engine record for this voucher as seen by one customer.

        ``claimed`` decides between AVAILABLE and UNCLAIMED; a used-up
        voucher carries the OUT_OF_STOCK reason.
        """
        if self.apply_type == VoucherApplyType.SPECIFIC:
            # iterate so a prefetch_related('applicable_classifications') is honoured
            item_ids = frozenset(c.pk for c in self.applicable_classifications.all())
        else:
            item_ids = frozenset()

        return VoucherData(
            id=self.pk,
            code=self.code,
            scope=self.scope,
            brand_id=self.brand_id,
            discount_type=self.discount_type,
            discount_value=self.discount_value,
            max_discount=self.max_discount,
            min_order_value=self.min_order_value,
            apply_type=self.apply_type,
            applicable_item_ids=item_ids,
            start_time=self.start_time,
            end_time=self.end_time,
            status=VoucherStatus.AVAILABLE if claimed else VoucherStatus.UNCLAIMED,
            unavailable_reason=UnavailableReason.OUT_OF_STOCK if self.is_out_of_stock else None,
        )
