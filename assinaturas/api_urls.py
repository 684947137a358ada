# assinaturas/api_urls.py
from django.urls import path
from . import api

app_name = "assinaturas"

urlpatterns = [
    path("planos/", api.PlanoListCreate.as_view(), name="planos"),
    path("planos/<int:pk>/", api.PlanoRetrieveUpdateDestroy.as_view(), name="plano_detail"),

    path("asaas/clientes/", api.AsaasClientes.as_view(), name="asaas_clientes"),
    path("asaas/assinaturas/", api.AsaasAssinaturas.as_view(), name="asaas_assinaturas"),
    path("asaas/pagamentos/", api.AsaasPagamentos.as_view(), name="asaas_pagamentos"),
    path("asaas/criar-cliente/", api.AsaasCriarCliente.as_view(), name="asaas_criar_cliente"),
    path("asaas/criar-assinatura/", api.AsaasCriarAssinatura.as_view(), name="asaas_criar_assinatura"),
    path("asaas/sincronizar/", api.AsaasSincronizar.as_view(), name="asaas_sincronizar"),
    path("asaas/cache/", api.AsaasLimparCache.as_view(), name="asaas_cache"),
]
