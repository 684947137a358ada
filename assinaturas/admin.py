# assinaturas/admin.py
from django.contrib import admin
from .models import PlanoAssinatura


@admin.register(PlanoAssinatura)
class PlanoAssinaturaAdmin(admin.ModelAdmin):
    list_display = ("nome", "categoria", "valor_mensal", "ativo", "created_at")
    list_filter = ("ativo", "categoria")
    search_fields = ("nome", "descricao")
    filter_horizontal = ("servicos_incluidos",)
    ordering = ("valor_mensal",)
