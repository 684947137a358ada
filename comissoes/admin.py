# comissoes/admin.py
from django.contrib import admin
from .models import Comissao, Distribuicao, DistribuicaoItem, TotalServico


class DistribuicaoItemInline(admin.TabularInline):
    model = DistribuicaoItem
    extra = 0
    readonly_fields = ("barbeiro", "servico", "quantidade", "minutos_trabalhados", "faturamento_proporcional", "comissao")
    can_delete = False


@admin.register(Distribuicao)
class DistribuicaoAdmin(admin.ModelAdmin):
    list_display = ("periodo_inicio", "periodo_fim", "faturamento_total", "percentual_comissao", "total_minutos", "created_at")
    date_hierarchy = "periodo_inicio"
    inlines = [DistribuicaoItemInline]


@admin.register(Comissao)
class ComissaoAdmin(admin.ModelAdmin):
    list_display = ("barbeiro", "mes", "valor", "updated_at")
    list_filter = ("mes", "barbeiro")
    ordering = ("-mes",)


@admin.register(TotalServico)
class TotalServicoAdmin(admin.ModelAdmin):
    list_display = ("servico", "mes", "total_mes")
    list_filter = ("mes",)
