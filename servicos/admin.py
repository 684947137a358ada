# servicos/admin.py
from django.contrib import admin, messages

from .models import Servico


@admin.register(Servico)
class ServicoAdmin(admin.ModelAdmin):
    # Lista
    list_display = ("nome", "duracao_min", "preco", "percentual_comissao", "is_assinatura", "ativo", "updated_at")
    list_filter = ("is_assinatura", "ativo")
    search_fields = ("nome", "descricao")
    ordering = ("nome",)
    list_per_page = 50

    # Edição rápida na listagem
    list_editable = ("duracao_min", "preco", "is_assinatura", "ativo")

    # Form
    readonly_fields = ("created_at", "updated_at")
    fieldsets = (
        (None, {"fields": ("nome", "descricao")}),
        ("Tempo, preço e comissão", {"fields": ("duracao_min", "preco", "percentual_comissao")}),
        ("Status", {"fields": ("is_assinatura", "ativo")}),
        ("Auditoria", {"classes": ("collapse",), "fields": ("created_at", "updated_at")}),
    )

    save_as = True
    actions = ("ativar", "desativar", "duplicar")

    def ativar(self, request, queryset):
        n = queryset.update(ativo=True)
        self.message_user(request, f"{n} serviço(s) ativado(s).", level=messages.SUCCESS)
    ativar.short_description = "Ativar selecionados"

    def desativar(self, request, queryset):
        n = queryset.update(ativo=False)
        self.message_user(request, f"{n} serviço(s) desativado(s).", level=messages.SUCCESS)
    desativar.short_description = "Desativar selecionados"

    def duplicar(self, request, queryset):
        created = 0
        for s in queryset:
            s.pk = None
            s.nome = f"{s.nome} (cópia)"
            s.ativo = False
            s.save()
            created += 1
        self.message_user(request, f"{created} cópia(s) criada(s) como inativas.", level=messages.SUCCESS)
    duplicar.short_description = "Duplicar como inativo(s)"
