# comissoes/api.py
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from barbeiros.models import Barbeiro
from core.periodos import mes_atual, parse_mes
from core.permissions import IsAdmin, IsEquipe, barbeiro_id_de, is_equipe, pode_ver_barbeiro
from . import services
from .models import Comissao, Distribuicao, TotalServico
from .serializers import (
    CalcularDistribuicaoSerializer,
    ComissaoSerializer,
    DistribuicaoDetalheSerializer,
    DistribuicaoSerializer,
    SalvarDistribuicaoSerializer,
    TotalServicoSerializer,
)


def _mes_do_request(request) -> str:
    mes = request.query_params.get("mes")
    return parse_mes(mes) if mes else mes_atual()


def _barbeiro_visivel(request, barbeiro_id: int) -> Barbeiro:
    if not pode_ver_barbeiro(request.user, barbeiro_id):
        raise PermissionDenied("Acesso negado.")
    return get_object_or_404(Barbeiro, pk=barbeiro_id)


# -------------------------------
# Distribuição
# -------------------------------
class DistribuicaoCalcular(APIView):
    permission_classes = [IsAdmin]

    def post(self, request):
        ser = CalcularDistribuicaoSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        return Response(services.resultado_to_dict(services.calcular(ser.validated_data)))


class DistribuicaoSalvar(APIView):
    permission_classes = [IsAdmin]

    def post(self, request):
        ser = SalvarDistribuicaoSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        dist = services.salvar(ser.validated_data)
        return Response(
            {"message": "Distribuição salva com sucesso.", "distribuicao": DistribuicaoDetalheSerializer(dist).data},
            status=status.HTTP_201_CREATED,
        )


class DistribuicaoList(generics.ListAPIView):
    queryset = Distribuicao.objects.all()
    serializer_class = DistribuicaoSerializer
    permission_classes = [IsAdmin]


class DistribuicaoDetail(generics.RetrieveAPIView):
    queryset = Distribuicao.objects.prefetch_related("itens__barbeiro", "itens__servico")
    serializer_class = DistribuicaoDetalheSerializer
    permission_classes = [IsAdmin]


# -------------------------------
# Comissões
# -------------------------------
class ComissaoBarbeiros(APIView):
    """GET /api/comissao/barbeiros?mes=YYYY-MM (barbeiro recebe só a própria linha)."""

    def get(self, request):
        linhas = services.relatorio_mensal(_mes_do_request(request))
        if not is_equipe(request.user):
            proprio = barbeiro_id_de(request.user)
            linhas = [l for l in linhas if l["barbeiro"]["id"] == proprio]
        return Response(linhas)


class ComissaoStats(APIView):
    permission_classes = [IsEquipe]

    def get(self, request):
        return Response(services.estatisticas_mes(_mes_do_request(request)))


class ComissaoAtual(APIView):
    def get(self, request, barbeiro_id: int, mes: str):
        mes = parse_mes(mes)
        barbeiro = _barbeiro_visivel(request, barbeiro_id)
        return Response(services.comissao_atual(barbeiro.pk, mes))


class ComissoesDoBarbeiro(APIView):
    def get(self, request, barbeiro_id: int):
        barbeiro = _barbeiro_visivel(request, barbeiro_id)
        qs = Comissao.objects.filter(barbeiro=barbeiro).order_by("-mes")
        return Response(ComissaoSerializer(qs, many=True).data)


# -------------------------------
# Tetos mensais
# -------------------------------
class TotalServicosDoMes(APIView):
    permission_classes = [IsAdmin]

    def get(self, request, mes: str):
        qs = TotalServico.objects.filter(mes=parse_mes(mes)).select_related("servico")
        return Response(TotalServicoSerializer(qs, many=True).data)


class TotalServicoSalvar(APIView):
    permission_classes = [IsAdmin]

    def post(self, request):
        ser = TotalServicoSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        obj = services.salvar_total_servico(**ser.validated_data)
        return Response(TotalServicoSerializer(obj).data)


class ValidarLimites(APIView):
    permission_classes = [IsAdmin]

    def get(self, request, mes: str):
        return Response(services.validar_limites(parse_mes(mes)))
