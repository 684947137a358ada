# comissoes/api_urls.py
from django.urls import path
from . import api

app_name = "comissoes"

urlpatterns = [
    path("distribuicao/", api.DistribuicaoList.as_view(), name="distribuicoes"),
    path("distribuicao/<int:pk>/", api.DistribuicaoDetail.as_view(), name="distribuicao_detail"),
    path("distribuicao/calcular/", api.DistribuicaoCalcular.as_view(), name="distribuicao_calcular"),
    path("distribuicao/salvar/", api.DistribuicaoSalvar.as_view(), name="distribuicao_salvar"),

    path("comissao/barbeiros/", api.ComissaoBarbeiros.as_view(), name="comissao_barbeiros"),
    path("comissao/stats/", api.ComissaoStats.as_view(), name="comissao_stats"),
    path("comissao-atual/<int:barbeiro_id>/<str:mes>/", api.ComissaoAtual.as_view(), name="comissao_atual"),
    path("comissoes/barbeiro/<int:barbeiro_id>/", api.ComissoesDoBarbeiro.as_view(), name="comissoes_barbeiro"),

    path("total-servicos/", api.TotalServicoSalvar.as_view(), name="total_servicos_salvar"),
    path("total-servicos/<str:mes>/", api.TotalServicosDoMes.as_view(), name="total_servicos_mes"),
    path("validate-limits/<str:mes>/", api.ValidarLimites.as_view(), name="validate_limits"),
]
