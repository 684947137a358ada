# clientes/admin.py
from django.contrib import admin
from .models import Cliente


@admin.register(Cliente)
class ClienteAdmin(admin.ModelAdmin):
    list_display = (
        "nome", "email", "telefone", "origem", "plano_nome", "plano_valor",
        "status_assinatura", "data_vencimento_assinatura",
    )
    list_filter = ("origem", "status_assinatura")
    search_fields = ("nome", "email", "telefone", "cpf", "asaas_customer_id")
    ordering = ("nome",)
