# fila/api_urls.py
from django.urls import path
from . import api

app_name = "fila"

urlpatterns = [
    path("lista-da-vez/fila-mensal/<str:mes>/", api.FilaMensal.as_view(), name="fila_mensal"),
    path("lista-da-vez/proximo/", api.Proximo.as_view(), name="proximo"),
    path("lista-da-vez/adicionar-atendimento/", api.AdicionarAtendimento.as_view(), name="adicionar_atendimento"),
    path("lista-da-vez/passar-vez/", api.PassarVez.as_view(), name="passar_vez"),
    path("lista-da-vez/zerar/", api.Zerar.as_view(), name="zerar"),
    path("lista-da-vez/atendimentos/", api.CriarAtendimentoDiario.as_view(), name="criar_atendimento_diario"),
    path("lista-da-vez/atendimentos/<str:data>/", api.AtendimentosDoDia.as_view(), name="atendimentos_do_dia"),
    path("lista-da-vez/salvar/", api.SalvarDia.as_view(), name="salvar_dia"),
    path("lista-da-vez/barbeiro/<int:barbeiro_id>/<str:mes>/", api.PosicaoDoBarbeiro.as_view(), name="posicao_barbeiro"),

    path("ordem-fila/", api.OrdemFilaList.as_view(), name="ordem_fila"),
    path("ordem-fila/inicializar/", api.OrdemFilaInicializar.as_view(), name="ordem_fila_inicializar"),
    path("ordem-fila/reordenar/", api.OrdemFilaReordenar.as_view(), name="ordem_fila_reordenar"),
    path("ordem-fila/<int:barbeiro_id>/toggle/", api.OrdemFilaToggle.as_view(), name="ordem_fila_toggle"),
]
