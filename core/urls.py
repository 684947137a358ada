# core/urls.py
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),

    # -------- AUTENTICAÇÃO / EQUIPE --------
    path("api/", include(("barbeiros.api_urls", "barbeiros"), namespace="barbeiros")),

    # -------- CADASTROS --------
    path("api/servicos/", include(("servicos.api_urls", "servicos"), namespace="servicos")),
    path("api/clientes/", include(("clientes.api_urls", "clientes"), namespace="clientes")),
    path("api/", include(("assinaturas.api_urls", "assinaturas"), namespace="assinaturas")),

    # -------- OPERAÇÃO --------
    path("api/", include(("agendamentos.api_urls", "agendamentos"), namespace="agendamentos")),
    path("api/", include(("fila.api_urls", "fila"), namespace="fila")),

    # -------- FINANCEIRO --------
    path("api/", include(("comissoes.api_urls", "comissoes"), namespace="comissoes")),
    path("api/dashboard/", include(("painel.api_urls", "painel"), namespace="painel")),
]
