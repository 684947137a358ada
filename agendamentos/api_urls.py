# agendamentos/api_urls.py
from django.urls import path
from . import api

app_name = "agendamentos"

urlpatterns = [
    path("agendamentos/", api.AgendamentoListCreate.as_view(), name="list_create"),
    path("agendamentos/<int:pk>/", api.AgendamentoRetrieveUpdateDestroy.as_view(), name="retrieve_update_destroy"),
    path("agendamentos/<int:pk>/finalizar/", api.AgendamentoFinalizar.as_view(), name="finalizar"),
    path("agendamentos/<int:pk>/cancelar/", api.AgendamentoCancelar.as_view(), name="cancelar"),

    path("atendimentos/", api.AtendimentoListCreate.as_view(), name="atendimentos"),
    path("atendimentos/<int:pk>/", api.AtendimentoRetrieveUpdateDestroy.as_view(), name="atendimento_detail"),
    path("atendimentos/resumo/<int:barbeiro_id>/<str:mes>/", api.AtendimentoResumo.as_view(), name="atendimentos_resumo"),
]
