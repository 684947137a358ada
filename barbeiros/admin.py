# barbeiros/admin.py
from django.contrib import admin, messages

from .models import Barbeiro, Perfil


@admin.register(Barbeiro)
class BarbeiroAdmin(admin.ModelAdmin):
    list_display = ("nome", "email", "percentual_comissao", "ativo", "criado_em")
    list_filter = ("ativo",)
    search_fields = ("nome", "email")
    list_editable = ("percentual_comissao", "ativo")
    actions = ("ativar", "desativar")

    def ativar(self, request, queryset):
        n = queryset.update(ativo=True)
        self.message_user(request, f"{n} barbeiro(s) ativado(s).", level=messages.SUCCESS)
    ativar.short_description = "Ativar selecionados"

    def desativar(self, request, queryset):
        n = queryset.update(ativo=False)
        self.message_user(request, f"{n} barbeiro(s) desativado(s).", level=messages.SUCCESS)
    desativar.short_description = "Desativar selecionados"


@admin.register(Perfil)
class PerfilAdmin(admin.ModelAdmin):
    list_display = ("user", "papel", "barbeiro")
    list_filter = ("papel",)
    search_fields = ("user__username", "user__email", "barbeiro__nome")
