# servicos/models.py
from decimal import Decimal
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Servico(models.Model):
    nome = models.CharField(max_length=120, unique=True)
    preco = models.DecimalField(max_digits=8, decimal_places=2, default=Decimal("0.00"))
    duracao_min = models.PositiveIntegerField(default=30, validators=[MinValueValidator(1)])
    percentual_comissao = models.PositiveSmallIntegerField(
        default=40, validators=[MaxValueValidator(100)]
    )
    # entra no pool de minutos das assinaturas
    is_assinatura = models.BooleanField(default=False)
    descricao = models.TextField(null=True, blank=True)
    ativo = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["nome"]
        indexes = [models.Index(fields=["nome"], name="servico_nome_idx")]

    def __str__(self):
        return self.nome
