# comissoes/models.py
from decimal import Decimal
from django.core.validators import MaxValueValidator
from django.db import models


class Distribuicao(models.Model):
    periodo_inicio = models.DateField()
    periodo_fim = models.DateField()
    faturamento_total = models.DecimalField(max_digits=12, decimal_places=2)
    percentual_comissao = models.PositiveSmallIntegerField(default=40, validators=[MaxValueValidator(100)])
    total_minutos = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [models.Index(fields=["periodo_inicio"], name="distrib_periodo_idx")]

    def __str__(self):
        return f"Distribuição {self.periodo_inicio:%d/%m/%Y}-{self.periodo_fim:%d/%m/%Y} (R$ {self.faturamento_total})"


class DistribuicaoItem(models.Model):
    distribuicao = models.ForeignKey(Distribuicao, on_delete=models.CASCADE, related_name="itens")
    barbeiro = models.ForeignKey("barbeiros.Barbeiro", on_delete=models.PROTECT, related_name="itens_distribuicao")
    servico = models.ForeignKey("servicos.Servico", on_delete=models.PROTECT, related_name="itens_distribuicao")
    quantidade = models.PositiveIntegerField(default=0)
    minutos_trabalhados = models.PositiveIntegerField(default=0)
    faturamento_proporcional = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    comissao = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["distribuicao", "barbeiro", "servico"]


class Comissao(models.Model):
    barbeiro = models.ForeignKey("barbeiros.Barbeiro", on_delete=models.PROTECT, related_name="comissoes")
    mes = models.CharField(max_length=7)  # YYYY-MM
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    distribuicao = models.ForeignKey(
        Distribuicao, on_delete=models.SET_NULL, null=True, blank=True, related_name="comissoes"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-mes", "barbeiro"]
        constraints = [
            models.UniqueConstraint(fields=["barbeiro", "mes"], name="uniq_comissao_barbeiro_mes"),
        ]

    def __str__(self):
        return f"{self.barbeiro} {self.mes}: R$ {self.valor}"


class TotalServico(models.Model):
    """Teto mensal de atendimentos de um serviço."""
    servico = models.ForeignKey("servicos.Servico", on_delete=models.CASCADE, related_name="totais_mensais")
    mes = models.CharField(max_length=7)
    total_mes = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["mes", "servico"]
        constraints = [
            models.UniqueConstraint(fields=["servico", "mes"], name="uniq_total_servico_mes"),
        ]

    def __str__(self):
        return f"{self.servico} {self.mes}: {self.total_mes}"
