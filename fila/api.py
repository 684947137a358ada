# fila/api.py
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from barbeiros.models import Barbeiro
from core.periodos import mes_atual, parse_data, parse_mes
from core.permissions import IsEquipe, pode_ver_barbeiro
from . import services
from .models import OrdemFila
from .serializers import (
    AdicionarAtendimentoSerializer,
    AtendimentoDiarioSerializer,
    OrdemFilaSerializer,
    PassarVezSerializer,
    ReordenarSerializer,
    SalvarDiaSerializer,
    ZerarSerializer,
    posicao_to_dict,
)


# -------------------------------
# Lista da Vez
# -------------------------------
class FilaMensal(APIView):
    permission_classes = [IsEquipe]

    def get(self, request, mes: str):
        dados = services.fila_do_mes(parse_mes(mes))
        return Response({
            "mes": dados["mes"],
            "fila": [posicao_to_dict(p) for p in dados["fila"]],
            "inativos": [posicao_to_dict(p) for p in dados["inativos"]],
            "proximo": posicao_to_dict(dados["proximo"]),
        })


class Proximo(APIView):
    permission_classes = [IsEquipe]

    def get(self, request):
        mes = request.query_params.get("mes")
        prox = services.proximo(parse_mes(mes) if mes else None)
        if prox is None:
            return Response({"message": "Nenhum barbeiro ativo na fila.", "proximo": None})
        return Response({"proximo": posicao_to_dict(prox)})


class AdicionarAtendimento(APIView):
    permission_classes = [IsEquipe]

    def post(self, request):
        ser = AdicionarAtendimentoSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        barbeiro = ser.validated_data.get("barbeiro_id")
        linha = services.adicionar_atendimento(
            barbeiro.pk if barbeiro else None,
            ser.validated_data.get("data"),
        )
        return Response(
            {
                "message": "Atendimento registrado.",
                "modo": "manual" if barbeiro else "automatico",
                "atendimento": AtendimentoDiarioSerializer(linha).data,
            },
            status=status.HTTP_201_CREATED,
        )


class PassarVez(APIView):
    permission_classes = [IsEquipe]

    def post(self, request):
        ser = PassarVezSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        linha = services.passar_vez(ser.validated_data["barbeiro_id"].pk, ser.validated_data.get("data"))
        return Response({"message": "Vez passada.", "atendimento": AtendimentoDiarioSerializer(linha).data})


class Zerar(APIView):
    permission_classes = [IsEquipe]

    def post(self, request):
        ser = ZerarSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        mes = ser.validated_data.get("mes") or mes_atual()
        n = services.zerar_mes(mes)
        return Response({"message": f"Fila de {mes} zerada.", "mes": mes, "linhas": n})


class AtendimentosDoDia(APIView):
    permission_classes = [IsEquipe]

    def get(self, request, data: str):
        qs = services.atendimentos_do_dia(parse_data(data))
        return Response(AtendimentoDiarioSerializer(qs, many=True).data)


class CriarAtendimentoDiario(APIView):
    """Criação estrita: a mesma linha de barbeiro/dia duas vezes dá 409."""
    permission_classes = [IsEquipe]

    def post(self, request):
        ser = AtendimentoDiarioSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        linha = services.criar_dia(**ser.validated_data)
        return Response(AtendimentoDiarioSerializer(linha).data, status=status.HTTP_201_CREATED)


class SalvarDia(APIView):
    permission_classes = [IsEquipe]

    def post(self, request):
        ser = SalvarDiaSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        linhas = services.salvar_dia(ser.validated_data["data"], ser.validated_data["atendimentos"])
        return Response({
            "message": "Atendimentos do dia salvos.",
            "atendimentos": AtendimentoDiarioSerializer(linhas, many=True).data,
        })


class PosicaoDoBarbeiro(APIView):
    def get(self, request, barbeiro_id: int, mes: str):
        mes = parse_mes(mes)
        if not pode_ver_barbeiro(request.user, barbeiro_id):
            raise PermissionDenied("Acesso negado.")
        get_object_or_404(Barbeiro, pk=barbeiro_id)
        return Response(services.posicao_do_barbeiro(barbeiro_id, mes))


# -------------------------------
# Ordem da fila
# -------------------------------
class OrdemFilaList(APIView):
    permission_classes = [IsEquipe]

    def get(self, request):
        qs = OrdemFila.objects.select_related("barbeiro")
        return Response(OrdemFilaSerializer(qs, many=True).data)


class OrdemFilaInicializar(APIView):
    permission_classes = [IsEquipe]

    def post(self, request):
        criadas = services.inicializar_ordem()
        qs = OrdemFila.objects.select_related("barbeiro")
        return Response({"criadas": criadas, "ordem": OrdemFilaSerializer(qs, many=True).data})


class OrdemFilaReordenar(APIView):
    permission_classes = [IsEquipe]

    def post(self, request):
        ser = ReordenarSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        ordem = services.reordenar(ser.validated_data["ordem"])
        return Response(OrdemFilaSerializer(ordem, many=True).data)


class OrdemFilaToggle(APIView):
    permission_classes = [IsEquipe]

    def post(self, request, barbeiro_id: int):
        barbeiro = get_object_or_404(Barbeiro, pk=barbeiro_id)
        ordem = services.alternar_ativo(barbeiro)
        return Response(OrdemFilaSerializer(ordem).data)
