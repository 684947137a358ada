# fila/models.py
from django.db import models

from core.periodos import mes_de


class OrdemFila(models.Model):
    """Posição manual do barbeiro na Lista da Vez e se ele está na rotação."""
    barbeiro = models.OneToOneField(
        "barbeiros.Barbeiro",
        on_delete=models.CASCADE,
        related_name="ordem_fila",
    )
    posicao = models.PositiveIntegerField(default=0)
    ativo = models.BooleanField(default=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["posicao", "id"]

    def __str__(self):
        return f"{self.posicao}. {self.barbeiro} ({'ativo' if self.ativo else 'fora'})"


class AtendimentoDiario(models.Model):
    """Contadores da fila de um barbeiro em um dia."""
    barbeiro = models.ForeignKey(
        "barbeiros.Barbeiro",
        on_delete=models.CASCADE,
        related_name="atendimentos_diarios",
    )
    data = models.DateField()
    mes = models.CharField(max_length=7)  # YYYY-MM
    atendimentos_diarios = models.PositiveIntegerField(default=0)
    vezes_passou = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["data", "barbeiro"]
        indexes = [models.Index(fields=["mes", "barbeiro"], name="fila_mes_barbeiro_idx")]
        constraints = [
            models.UniqueConstraint(
                fields=["barbeiro", "data", "mes"],
                name="uniq_fila_barbeiro_data_mes",
            ),
        ]

    def __str__(self):
        return f"{self.barbeiro} {self.data:%d/%m}: {self.atendimentos_diarios} (passou {self.vezes_passou})"

    def save(self, *args, **kwargs):
        self.mes = mes_de(self.data)
        super().save(*args, **kwargs)
