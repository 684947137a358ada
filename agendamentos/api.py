# agendamentos/api.py
from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import generics
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from core.periodos import formatar_minutos, parse_data, parse_inteiro, parse_mes
from core.permissions import IsEquipe, IsEquipeOrReadOnly, pode_ver_barbeiro, scope_queryset_by_role
from .models import Agendamento, Atendimento
from .serializers import AgendamentoSerializer, AtendimentoSerializer

log = logging.getLogger(__name__)


# -------------------------------
# Agendamentos
# -------------------------------
class AgendamentoListCreate(generics.ListCreateAPIView):
    """
    GET  /api/agendamentos/?date=YYYY-MM-DD&barbeiro=&status=
    POST /api/agendamentos/
    """
    serializer_class = AgendamentoSerializer
    permission_classes = [IsEquipeOrReadOnly]

    def get_queryset(self):
        params = self.request.query_params
        qs = Agendamento.objects.select_related("barbeiro", "servico", "cliente")
        qs = scope_queryset_by_role(qs, self.request.user)

        dia = (params.get("date") or "").strip()
        if dia:
            qs = qs.filter(data_hora__date=parse_data(dia))
        if params.get("barbeiro"):
            qs = qs.filter(barbeiro_id=parse_inteiro(params["barbeiro"], "barbeiro"))
        if params.get("status"):
            qs = qs.filter(status=params["status"].strip().upper())
        return qs.order_by("data_hora")


class AgendamentoRetrieveUpdateDestroy(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = AgendamentoSerializer
    permission_classes = [IsEquipeOrReadOnly]

    def get_queryset(self):
        qs = Agendamento.objects.select_related("barbeiro", "servico", "cliente")
        return scope_queryset_by_role(qs, self.request.user)


class AgendamentoFinalizar(APIView):
    permission_classes = [IsEquipe]

    def patch(self, request, pk: int):
        ag = get_object_or_404(Agendamento, pk=pk)
        atendimento = ag.finalizar()
        log.info("[agenda] agendamento %s finalizado (atendimento=%s)", ag.pk, atendimento.pk)
        return Response({
            "message": "Agendamento finalizado.",
            "agendamento": AgendamentoSerializer(ag).data,
            "atendimento": AtendimentoSerializer(atendimento).data,
        })


class AgendamentoCancelar(APIView):
    permission_classes = [IsEquipe]

    def patch(self, request, pk: int):
        ag = get_object_or_404(Agendamento, pk=pk)
        ag.cancelar()
        log.info("[agenda] agendamento %s cancelado", ag.pk)
        return Response({"message": "Agendamento cancelado.", "agendamento": AgendamentoSerializer(ag).data})


# -------------------------------
# Atendimentos (livro de serviços)
# -------------------------------
class AtendimentoListCreate(generics.ListCreateAPIView):
    """GET /api/atendimentos/?mes=YYYY-MM&barbeiro="""
    serializer_class = AtendimentoSerializer
    permission_classes = [IsEquipeOrReadOnly]

    def get_queryset(self):
        params = self.request.query_params
        qs = Atendimento.objects.select_related("barbeiro", "servico")
        qs = scope_queryset_by_role(qs, self.request.user)
        if params.get("mes"):
            qs = qs.filter(mes=parse_mes(params["mes"]))
        if params.get("barbeiro"):
            qs = qs.filter(barbeiro_id=parse_inteiro(params["barbeiro"], "barbeiro"))
        return qs


class AtendimentoRetrieveUpdateDestroy(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = AtendimentoSerializer
    permission_classes = [IsEquipeOrReadOnly]

    def get_queryset(self):
        qs = Atendimento.objects.select_related("barbeiro", "servico")
        return scope_queryset_by_role(qs, self.request.user)


class AtendimentoResumo(APIView):
    """Atendimentos do barbeiro no mês agrupados por serviço."""

    def get(self, request, barbeiro_id: int, mes: str):
        mes = parse_mes(mes)
        if not pode_ver_barbeiro(request.user, barbeiro_id):
            raise PermissionDenied("Acesso negado.")

        qs = (
            Atendimento.objects
            .filter(barbeiro_id=barbeiro_id, mes=mes)
            .select_related("servico")
            .order_by("data_atendimento")
        )
        grupos: dict[int, dict] = {}
        for a in qs:
            g = grupos.setdefault(a.servico_id, {
                "servico_id": a.servico_id,
                "servico_nome": a.servico.nome,
                "total_quantidade": 0,
                "total_minutos": 0,
                "dias": [],
            })
            g["total_quantidade"] += a.quantidade
            g["total_minutos"] += a.minutos
            g["dias"].append({"data": timezone.localtime(a.data_atendimento).date().isoformat(), "quantidade": a.quantidade})

        total_minutos = sum(g["total_minutos"] for g in grupos.values())
        return Response({
            "barbeiro_id": barbeiro_id,
            "mes": mes,
            "total_atendimentos": sum(g["total_quantidade"] for g in grupos.values()),
            "total_minutos": total_minutos,
            "tempo_formatado": formatar_minutos(total_minutos),
            "servicos": list(grupos.values()),
        })
