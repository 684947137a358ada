# barbeiros/models.py
from django.conf import settings
from django.db import models


class Barbeiro(models.Model):
    nome = models.CharField(max_length=120)
    email = models.EmailField(unique=True)
    percentual_comissao = models.PositiveSmallIntegerField(default=40)
    ativo = models.BooleanField(default=True)
    criado_em = models.DateTimeField(auto_now_add=True)

    class Meta:
        # ordem de cadastro: critério de desempate da Lista da Vez
        ordering = ["criado_em", "id"]

    def __str__(self):
        return self.nome


class Papel(models.TextChoices):
    ADMIN = "ADMIN", "Administrador"
    RECEPCIONISTA = "RECEPCIONISTA", "Recepcionista"
    BARBEIRO = "BARBEIRO", "Barbeiro"


class Perfil(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="perfil",
    )
    papel = models.CharField(max_length=16, choices=Papel.choices, default=Papel.BARBEIRO)
    barbeiro = models.ForeignKey(
        Barbeiro,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="usuarios",
    )

    def __str__(self):
        return f"{self.user} ({self.papel})"
