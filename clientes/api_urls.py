# clientes/api_urls.py
from django.urls import path
from . import api

app_name = "clientes"

urlpatterns = [
    path("", api.ClienteListCreate.as_view(), name="list_create"),
    path("<int:pk>/", api.ClienteRetrieveUpdateDestroy.as_view(), name="retrieve_update_destroy"),

    path("unificados/", api.ClientesUnificados.as_view(), name="unificados"),
    path("stats/", api.ClientesStats.as_view(), name="stats"),
    path("vencendo/", api.ClientesVencendo.as_view(), name="vencendo"),
    path("vencidos/", api.ClientesVencidos.as_view(), name="vencidos"),
    path("cadastro-manual/", api.CadastroManual.as_view(), name="cadastro_manual"),
    path("importar-lote/", api.ImportarLote.as_view(), name="importar_lote"),
]
