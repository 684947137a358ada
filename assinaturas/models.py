# assinaturas/models.py
from decimal import Decimal
from django.db import models


class PlanoAssinatura(models.Model):
    nome = models.CharField(max_length=120)
    valor_mensal = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    descricao = models.TextField(null=True, blank=True)
    categoria = models.CharField(max_length=60, blank=True)
    servicos_incluidos = models.ManyToManyField(
        "servicos.Servico", blank=True, related_name="planos"
    )
    ativo = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["valor_mensal", "nome"]

    def __str__(self):
        return f"{self.nome} (R$ {self.valor_mensal})"
