# fila/signals.py
from __future__ import annotations

import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from barbeiros.models import Barbeiro
from .models import OrdemFila
from .services import proxima_posicao

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Barbeiro)
def colocar_novo_barbeiro_na_fila(sender, instance: Barbeiro, created: bool, raw: bool = False, **kwargs):
    """Barbeiro recém-cadastrado entra no fim da Lista da Vez."""
    if not created or raw:
        return
    _, criado = OrdemFila.objects.get_or_create(
        barbeiro=instance,
        defaults={"posicao": proxima_posicao()},
    )
    if criado:
        logger.info("[fila] barbeiro %s adicionado ao fim da fila", instance.pk)
