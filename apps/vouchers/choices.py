from django.db import models


class VoucherScope(models.TextChoices):
    BRAND = 'BRAND', 'Marca'
    PLATFORM = 'PLATFORM', 'Plataforma'


class VoucherApplyType(models.TextChoices):
    ALL = 'ALL', 'Todos os itens'
    SPECIFIC = 'SPECIFIC', 'Itens específicos'


class VoucherStatus(models.TextChoices):
    AVAILABLE = 'AVAILABLE', 'Disponível'
    UNAVAILABLE = 'UNAVAILABLE', 'Indisponível'
    UNCLAIMED = 'UNCLAIMED', 'Não resgatado'


class UnavailableReason(models.TextChoices):
    NOT_START_YET = 'NOT_START_YET', 'Ainda não começou'
    NOT_APPLICABLE = 'NOT_APPLICABLE', 'Não aplicável aos itens'
    MINIMUM_ORDER_NOT_MET = 'MINIMUM_ORDER_NOT_MET', 'Pedido mínimo não atingido'
    OUT_OF_STOCK = 'OUT_OF_STOCK', 'Esgotado'
