# agendamentos/admin.py
from django.contrib import admin
from .models import Agendamento, Atendimento


@admin.register(Agendamento)
class AgendamentoAdmin(admin.ModelAdmin):
    list_display  = ("data_hora", "status", "cliente_nome", "barbeiro", "servico")
    list_filter   = ("status", "barbeiro")
    search_fields = ("cliente_nome", "observacoes")
    ordering      = ("-data_hora",)


@admin.register(Atendimento)
class AtendimentoAdmin(admin.ModelAdmin):
    list_display  = ("data_atendimento", "mes", "barbeiro", "servico", "quantidade")
    list_filter   = ("mes", "barbeiro")
    readonly_fields = ("mes",)
    ordering      = ("-data_atendimento",)
