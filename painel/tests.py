# painel/tests.py
from datetime import date, datetime, time
from decimal import Decimal

import pytest
from django.utils import timezone

from agendamentos.models import Agendamento, Atendimento
from clientes.models import Cliente, StatusAssinatura
from comissoes.models import Comissao


@pytest.fixture
def mes_de_marco(make_barbeiro, make_servico):
    ana, bruno = make_barbeiro("Ana"), make_barbeiro("Bruno")
    corte = make_servico("Corte", duracao_min=30)
    quando = timezone.make_aware(datetime(2025, 3, 10, 10, 0))
    Atendimento.objects.create(barbeiro=ana, servico=corte, quantidade=2, data_atendimento=quando)
    Atendimento.objects.create(barbeiro=bruno, servico=corte, quantidade=1, data_atendimento=quando)
    Cliente.objects.create(nome="Maria", email="maria@exemplo.com", plano_valor=Decimal("100.00"),
                           data_inicio_assinatura=date(2025, 3, 2))
    Cliente.objects.create(nome="Jorge", email="jorge@exemplo.com", plano_valor=Decimal("50.00"),
                           status_assinatura=StatusAssinatura.INADIMPLENTE)
    Comissao.objects.create(barbeiro=ana, mes="2025-03", valor=Decimal("30.00"))
    return ana, bruno, corte


def test_metricas_do_mes(recepcao_api, mes_de_marco):
    ana, _, corte = mes_de_marco
    meio_dia = timezone.make_aware(datetime.combine(timezone.localdate(), time(12, 0)))
    Agendamento.objects.create(cliente_nome="João", barbeiro=ana, servico=corte, data_hora=meio_dia)

    resp = recepcao_api.get("/api/dashboard/metrics/?mes=2025-03")
    assert resp.status_code == 200
    assert resp.data == {
        "mes": "2025-03",
        "faturamento_mensal": Decimal("100.00"),
        "assinaturas_ativas": 1,
        "minutos_trabalhados": 90,
        "horas_trabalhadas": "1h 30min",
        "atendimentos_mes": 3,
        "comissoes_pagas": Decimal("30.00"),
        "agendamentos_hoje": 1,
    }


def test_ranking_usa_comissao_salva(recepcao_api, mes_de_marco):
    ana, bruno, _ = mes_de_marco
    resp = recepcao_api.get("/api/dashboard/ranking/?mes=2025-03")
    assert [(r["posicao"], r["barbeiro"]["id"]) for r in resp.data] == [(1, ana.pk), (2, bruno.pk)]
    assert resp.data[0]["faturamento"] == Decimal("66.67")
    assert resp.data[0]["comissao"] == Decimal("30.00")
    assert resp.data[1]["comissao"] == Decimal("13.33")
    assert resp.data[1]["horas"] == "30min"


def test_mes_invalido(recepcao_api, db):
    assert recepcao_api.get("/api/dashboard/metrics/?mes=2025-13").status_code == 400


def test_painel_fechado_para_barbeiro(barbeiro_logado):
    client, _ = barbeiro_logado
    assert client.get("/api/dashboard/metrics/").status_code == 403
