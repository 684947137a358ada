# painel/api.py
from __future__ import annotations

from decimal import Decimal

from django.db.models import Count, Q, Sum
from django.utils import timezone
from rest_framework.response import Response
from rest_framework.views import APIView

from agendamentos.models import Agendamento, Atendimento, StatusAgendamento
from clientes.models import Cliente, StatusAssinatura
from comissoes.distribuicao import quantizar
from comissoes.models import Comissao
from comissoes.services import lancamentos_do_mes, relatorio_mensal
from core.periodos import formatar_minutos, mes_atual, parse_mes
from core.permissions import IsEquipe


def _mes(request) -> str:
    mes = request.query_params.get("mes")
    return parse_mes(mes) if mes else mes_atual()


class DashboardMetrics(APIView):
    """GET /api/dashboard/metrics/?mes=YYYY-MM"""
    permission_classes = [IsEquipe]

    def get(self, request):
        mes = _mes(request)
        hoje = timezone.localdate()

        clientes = Cliente.objects.aggregate(
            ativas=Count("id", filter=Q(status_assinatura=StatusAssinatura.ATIVO)),
            receita=Sum("plano_valor", filter=Q(status_assinatura=StatusAssinatura.ATIVO)),
        )
        minutos = sum(l.minutos for l in lancamentos_do_mes(mes))
        atendimentos = Atendimento.objects.filter(mes=mes).aggregate(n=Sum("quantidade"))["n"] or 0
        comissoes = Comissao.objects.filter(mes=mes).aggregate(s=Sum("valor"))["s"] or Decimal("0")
        agendados_hoje = Agendamento.objects.filter(
            data_hora__date=hoje, status=StatusAgendamento.AGENDADO
        ).count()

        return Response({
            "mes": mes,
            "faturamento_mensal": quantizar(clientes["receita"] or Decimal("0")),
            "assinaturas_ativas": clientes["ativas"],
            "minutos_trabalhados": minutos,
            "horas_trabalhadas": formatar_minutos(minutos),
            "atendimentos_mes": atendimentos,
            "comissoes_pagas": quantizar(comissoes),
            "agendamentos_hoje": agendados_hoje,
        })


class DashboardRanking(APIView):
    """Barbeiros ativos por faturamento proporcional no mês."""
    permission_classes = [IsEquipe]

    def get(self, request):
        mes = _mes(request)
        salvas = dict(Comissao.objects.filter(mes=mes).values_list("barbeiro_id", "valor"))
        ranking = []
        for pos, linha in enumerate(relatorio_mensal(mes), start=1):
            ranking.append({
                "posicao": pos,
                "barbeiro": linha["barbeiro"],
                "faturamento": linha["faturamento_assinatura"],
                "comissao": salvas.get(linha["barbeiro"]["id"], linha["comissao_assinatura"]),
                "minutos": linha["minutos_trabalhados_mes"],
                "horas": linha["horas_trabalhadas_mes"],
                "numero_servicos": linha["numero_servicos"],
            })
        return Response(ranking)
