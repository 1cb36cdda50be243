"""
Status and type enumerations shared by the catalog models and the engine.
"""

from django.db import models


class ClassificationStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', 'Ativo'
    INACTIVE = 'INACTIVE', 'Inativo'
    HIDDEN = 'HIDDEN', 'Oculto'


class ClassificationType(models.TextChoices):
    DEFAULT = 'DEFAULT', 'Padrão'
    CUSTOM = 'CUSTOM', 'Personalizado'


class ProductStatus(models.TextChoices):
    OFFICIAL = 'OFFICIAL', 'Oficial'
    FLASH_SALE = 'FLASH_SALE', 'Oferta relâmpago'
    INACTIVE = 'INACTIVE', 'Inativo'
    BANNED = 'BANNED', 'Banido'
    UN_PUBLISHED = 'UN_PUBLISHED', 'Não publicado'
    OUT_OF_STOCK = 'OUT_OF_STOCK', 'Esgotado'


class EventKind(models.TextChoices):
    PRE_ORDER = 'PRE_ORDER', 'Pré-venda'
    FLASH_SALE = 'FLASH_SALE', 'Oferta relâmpago'


class EventStatus(models.TextChoices):
    WAITING = 'WAITING', 'Aguardando'
    ACTIVE = 'ACTIVE', 'Ativo'
    INACTIVE = 'INACTIVE', 'Inativo'
    SOLD_OUT = 'SOLD_OUT', 'Esgotado'
    CANCELLED = 'CANCELLED', 'Cancelado'


class OrderEvent(models.TextChoices):
    NORMAL = 'NORMAL', 'Normal'
    FLASH_SALE = 'FLASH_SALE', 'Oferta relâmpago'
    PRE_ORDER = 'PRE_ORDER', 'Pré-venda'


class DiscountType(models.TextChoices):
    PERCENTAGE = 'PERCENTAGE', 'Percentual'
    AMOUNT = 'AMOUNT', 'Valor fixo'


class BlockReason(models.TextChoices):
    """Why a cart line cannot be selected for checkout."""
    PRODUCT_UNAVAILABLE = 'PRODUCT_UNAVAILABLE', 'Produto indisponível'
    NO_ACTIVE_CLASSIFICATION = 'NO_ACTIVE_CLASSIFICATION', 'Nenhuma variação ativa'
    OUT_OF_STOCK = 'OUT_OF_STOCK', 'Sem estoque'
    EVENT_CANCELLED = 'EVENT_CANCELLED', 'Evento cancelado'
    EVENT_INACTIVE = 'EVENT_INACTIVE', 'Evento inativo'
    EVENT_SOLD_OUT = 'EVENT_SOLD_OUT', 'Evento esgotado'
    HIDDEN = 'HIDDEN', 'Variação oculta'
