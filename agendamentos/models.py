# agendamentos/models.py
from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models, transaction
from django.db.models import Q
from django.utils import timezone

from core.erros import RegraDeNegocio
from core.periodos import mes_de


class StatusAgendamento(models.TextChoices):
    AGENDADO = "AGENDADO", "Agendado"
    FINALIZADO = "FINALIZADO", "Finalizado"
    CANCELADO = "CANCELADO", "Cancelado"


class Agendamento(models.Model):
    cliente = models.ForeignKey(
        "clientes.Cliente",
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name="agendamentos",
    )
    cliente_nome = models.CharField(max_length=120, blank=True)

    barbeiro = models.ForeignKey(
        "barbeiros.Barbeiro",
        on_delete=models.PROTECT,
        related_name="agendamentos",
    )
    servico = models.ForeignKey(
        "servicos.Servico",
        on_delete=models.PROTECT,
        related_name="agendamentos",
    )

    data_hora = models.DateTimeField()
    status = models.CharField(
        max_length=12,
        choices=StatusAgendamento.choices,
        default=StatusAgendamento.AGENDADO,
    )
    observacoes = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["data_hora"]
        indexes = [
            models.Index(fields=["data_hora"], name="ag_data_hora_idx"),
            models.Index(fields=["status"], name="ag_status_idx"),
            models.Index(fields=["barbeiro", "data_hora"], name="ag_barbeiro_data_idx"),
        ]

    def __str__(self):
        nome = self.cliente_nome or (self.cliente.nome if self.cliente_id else "-")
        return f"{nome} - {self.servico} ({timezone.localtime(self.data_hora):%d/%m %H:%M})"

    def save(self, *args, **kwargs):
        if not self.cliente_nome and self.cliente_id:
            self.cliente_nome = self.cliente.nome
        super().save(*args, **kwargs)

    # ----------------- regras de negócio -----------------
    @transaction.atomic
    def finalizar(self, when=None) -> "Atendimento":
        """
        AGENDADO -> FINALIZADO (idempotente) e lança o Atendimento no livro.
        Repetir a chamada devolve o mesmo Atendimento.
        """
        if self.status == StatusAgendamento.CANCELADO:
            raise RegraDeNegocio("Agendamentos cancelados não podem ser finalizados.")

        if self.status != StatusAgendamento.FINALIZADO:
            self.status = StatusAgendamento.FINALIZADO
            self.save(update_fields=["status", "updated_at"])

        atendimento, _ = Atendimento.objects.get_or_create(
            agendamento=self,
            defaults={
                "barbeiro_id": self.barbeiro_id,
                "servico_id": self.servico_id,
                "data_atendimento": when or self.data_hora,
                "quantidade": 1,
            },
        )
        return atendimento

    def cancelar(self):
        """AGENDADO -> CANCELADO (idempotente)."""
        if self.status == StatusAgendamento.CANCELADO:
            return self
        if self.status != StatusAgendamento.AGENDADO:
            raise RegraDeNegocio("Apenas agendamentos AGENDADOS podem ser cancelados.")
        self.status = StatusAgendamento.CANCELADO
        self.save(update_fields=["status", "updated_at"])
        return self


class Atendimento(models.Model):
    """Livro de serviços realizados; base das comissões."""
    barbeiro = models.ForeignKey(
        "barbeiros.Barbeiro",
        on_delete=models.PROTECT,
        related_name="atendimentos",
    )
    servico = models.ForeignKey(
        "servicos.Servico",
        on_delete=models.PROTECT,
        related_name="atendimentos",
    )
    data_atendimento = models.DateTimeField(default=timezone.now)
    quantidade = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    mes = models.CharField(max_length=7, editable=False, db_index=True)  # YYYY-MM

    agendamento = models.OneToOneField(
        Agendamento,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name="atendimento",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-data_atendimento"]
        indexes = [models.Index(fields=["barbeiro", "mes"], name="atend_barbeiro_mes_idx")]
        constraints = [
            models.CheckConstraint(condition=Q(quantidade__gte=1), name="atend_quantidade_gte_1"),
        ]

    def __str__(self):
        return f"{self.barbeiro} - {self.servico} x{self.quantidade} ({self.mes})"

    @property
    def minutos(self) -> int:
        return self.quantidade * self.servico.duracao_min

    def save(self, *args, **kwargs):
        self.mes = mes_de(self.data_atendimento)
        if kwargs.get("update_fields") is not None and "data_atendimento" in kwargs["update_fields"]:
            kwargs["update_fields"] = {*kwargs["update_fields"], "mes"}
        super().save(*args, **kwargs)
