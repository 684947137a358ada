# fila/admin.py
from django.contrib import admin
from .models import AtendimentoDiario, OrdemFila


@admin.register(OrdemFila)
class OrdemFilaAdmin(admin.ModelAdmin):
    list_display = ("posicao", "barbeiro", "ativo", "updated_at")
    list_editable = ("ativo",)
    ordering = ("posicao",)


@admin.register(AtendimentoDiario)
class AtendimentoDiarioAdmin(admin.ModelAdmin):
    list_display = ("data", "barbeiro", "atendimentos_diarios", "vezes_passou", "mes")
    list_filter = ("mes", "barbeiro")
    readonly_fields = ("mes",)
    ordering = ("-data",)
