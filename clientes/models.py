# clientes/models.py
from datetime import date
from decimal import Decimal
from typing import Optional

from django.db import models
from django.utils import timezone


class Origem(models.TextChoices):
    ASAAS_PRINCIPAL = "ASAAS_PRINCIPAL", "Asaas Principal"
    ASAAS_ANDREY = "ASAAS_ANDREY", "Asaas Andrey"
    EXTERNO = "EXTERNO", "Pagamento externo"


class StatusAssinatura(models.TextChoices):
    ATIVO = "ATIVO", "Ativo"
    INATIVO = "INATIVO", "Inativo"
    INADIMPLENTE = "INADIMPLENTE", "Inadimplente"


class Cliente(models.Model):
    nome = models.CharField(max_length=120)
    email = models.EmailField(blank=True)
    telefone = models.CharField(max_length=20, blank=True)
    cpf = models.CharField(max_length=18, blank=True)

    origem = models.CharField(max_length=20, choices=Origem.choices, default=Origem.EXTERNO)
    asaas_customer_id = models.CharField(max_length=40, null=True, blank=True)

    plano_nome = models.CharField(max_length=120, blank=True)
    plano_valor = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    forma_pagamento = models.CharField(max_length=30, blank=True)
    status_assinatura = models.CharField(
        max_length=14, choices=StatusAssinatura.choices, default=StatusAssinatura.ATIVO
    )
    data_inicio_assinatura = models.DateField(null=True, blank=True)
    data_vencimento_assinatura = models.DateField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["nome"]
        indexes = [
            models.Index(fields=["nome"], name="cliente_nome_idx"),
            models.Index(fields=["email"], name="cliente_email_idx"),
            models.Index(fields=["telefone"], name="cliente_telefone_idx"),
            models.Index(fields=["status_assinatura", "data_vencimento_assinatura"], name="cliente_status_venc_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["origem", "asaas_customer_id"],
                name="uniq_cliente_por_conta_asaas",
                condition=models.Q(asaas_customer_id__isnull=False),
            ),
        ]

    def __str__(self):
        tel = f" ({self.telefone})" if self.telefone else ""
        return f"{self.nome}{tel}"

    # --- helpers de vencimento ---
    def dias_para_vencer(self, hoje: Optional[date] = None) -> Optional[int]:
        if not self.data_vencimento_assinatura:
            return None
        hoje = hoje or timezone.localdate()
        return (self.data_vencimento_assinatura - hoje).days

    def esta_vencido(self, hoje: Optional[date] = None) -> bool:
        dias = self.dias_para_vencer(hoje)
        return dias is not None and dias < 0
