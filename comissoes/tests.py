# comissoes/tests.py
from datetime import date, datetime
from decimal import Decimal

import pytest
from django.utils import timezone

from agendamentos.models import Atendimento
from clientes.models import Cliente, StatusAssinatura
from comissoes.distribuicao import Lancamento, calcular_distribuicao, quantizar, taxa_participacao
from comissoes.models import Comissao, Distribuicao, DistribuicaoItem, TotalServico


def _lanc(barbeiro_id, minutos, servico_id=1, quantidade=1):
    return Lancamento(barbeiro_id=barbeiro_id, servico_id=servico_id, quantidade=quantidade, duracao_min=minutos)


def _aware(y, m, d, h=10):
    return timezone.make_aware(datetime(y, m, d, h, 0))


# ------------------------------------------------------------
# cálculo puro
# ------------------------------------------------------------
def test_divide_faturamento_pelos_minutos():
    res = calcular_distribuicao(
        [_lanc(1, 60), _lanc(2, 30)],
        Decimal("300"),
        40,
        barbeiros=[1, 2, 3],
    )
    assert [p.barbeiro_id for p in res.participacoes] == [1, 2, 3]
    assert [p.minutos_trabalhados for p in res.participacoes] == [60, 30, 0]
    assert [quantizar(p.faturamento_proporcional) for p in res.participacoes] == [
        Decimal("200.00"), Decimal("100.00"), Decimal("0.00"),
    ]
    assert [quantizar(p.comissao) for p in res.participacoes] == [
        Decimal("80.00"), Decimal("40.00"), Decimal("0.00"),
    ]
    assert res.total_minutos == 90
    assert quantizar(res.pool_comissao) == Decimal("120.00")


def test_fatias_somam_o_faturamento():
    res = calcular_distribuicao(
        [_lanc(1, 45, quantidade=3), _lanc(2, 30, quantidade=7), _lanc(3, 20, quantidade=1)],
        Decimal("1234.56"),
    )
    assert abs(res.total_distribuido - Decimal("1234.56")) < Decimal("0.000001")
    assert abs(res.total_comissao - res.pool_comissao) < Decimal("0.000001")


def test_pool_zerado_nao_divide_por_zero():
    res = calcular_distribuicao([_lanc(1, 30, quantidade=0)], Decimal("500"), barbeiros=[1, 2])
    assert res.total_minutos == 0
    for p in res.participacoes:
        assert p.taxa == 0
        assert p.faturamento_proporcional == 0
        assert p.comissao == 0


def test_sem_barbeiros_resultado_vazio():
    res = calcular_distribuicao([], Decimal("500"))
    assert res.participacoes == []
    assert res.total_comissao == 0


def test_itens_usam_a_mesma_taxa():
    res = calcular_distribuicao(
        [_lanc(1, 60, servico_id=10), _lanc(1, 30, servico_id=11), _lanc(2, 30, servico_id=10)],
        Decimal("120"),
    )
    b1 = res.por_barbeiro()[1]
    assert [(i.servico_id, i.minutos) for i in b1.itens] == [(10, 60), (11, 30)]
    assert [quantizar(i.faturamento_proporcional) for i in b1.itens] == [Decimal("60.00"), Decimal("30.00")]
    assert quantizar(b1.faturamento_proporcional) == Decimal("90.00")


def test_lancamentos_repetidos_sao_somados():
    res = calcular_distribuicao([_lanc(1, 30), _lanc(1, 30)], Decimal("100"))
    item = res.participacoes[0].itens[0]
    assert item.quantidade == 2
    assert item.minutos == 60


def test_percentual_invalido():
    with pytest.raises(ValueError):
        calcular_distribuicao([_lanc(1, 30)], Decimal("100"), 120)


def test_taxa_participacao():
    assert taxa_participacao(0, 0) == 0
    assert taxa_participacao(30, 120) == Decimal("0.25")


# ------------------------------------------------------------
# API de distribuição
# ------------------------------------------------------------
@pytest.fixture
def cenario(make_barbeiro, make_servico):
    a = make_barbeiro("Ana")
    b = make_barbeiro("Bruno")
    c = make_barbeiro("Caio")
    corte = make_servico("Corte", duracao_min=30, is_assinatura=True)
    barba = make_servico("Barba", duracao_min=30, is_assinatura=False)
    return a, b, c, corte, barba


def test_calcular_via_api(admin_api, cenario):
    a, b, c, corte, _ = cenario
    resp = admin_api.post("/api/distribuicao/calcular/", {
        "faturamento_total": "300.00",
        "lancamentos": [
            {"barbeiro_id": a.pk, "servico_id": corte.pk, "quantidade": 2},
            {"barbeiro_id": b.pk, "servico_id": corte.pk, "quantidade": 1},
        ],
        "barbeiros": [a.pk, b.pk, c.pk],
    }, format="json")

    assert resp.status_code == 200
    resultados = resp.data["resultados"]
    assert [r["barbeiro"]["nome"] for r in resultados] == ["Ana", "Bruno", "Caio"]
    assert [r["faturamento_proporcional"] for r in resultados] == [Decimal("200.00"), Decimal("100.00"), Decimal("0.00")]
    assert [r["comissao"] for r in resultados] == [Decimal("80.00"), Decimal("40.00"), Decimal("0.00")]
    assert resp.data["pool_comissao"] == Decimal("120.00")
    assert resp.data["percentual_comissao"] == 40


def test_calcular_apenas_servicos_de_assinatura(admin_api, cenario):
    a, b, _, corte, barba = cenario
    resp = admin_api.post("/api/distribuicao/calcular/", {
        "faturamento_total": "100.00",
        "apenas_assinatura": True,
        "lancamentos": [
            {"barbeiro_id": a.pk, "servico_id": corte.pk, "quantidade": 1},
            {"barbeiro_id": b.pk, "servico_id": barba.pk, "quantidade": 5},
        ],
    }, format="json")
    assert resp.status_code == 200
    assert resp.data["total_minutos"] == 30
    assert resp.data["resultados"][0]["faturamento_proporcional"] == Decimal("100.00")


def test_calcular_servico_inexistente(admin_api, cenario):
    a, *_ = cenario
    resp = admin_api.post("/api/distribuicao/calcular/", {
        "faturamento_total": "100.00",
        "lancamentos": [{"barbeiro_id": a.pk, "servico_id": 9999, "quantidade": 1}],
    }, format="json")
    assert resp.status_code == 400
    assert "9999" in resp.data["message"]


def test_calcular_exige_admin(recepcao_api, cenario):
    resp = recepcao_api.post("/api/distribuicao/calcular/", {"faturamento_total": "10"}, format="json")
    assert resp.status_code == 403


def test_salvar_grava_distribuicao_itens_e_comissoes(admin_api, cenario):
    a, b, _, corte, barba = cenario
    payload = {
        "periodo_inicio": "2025-03-01",
        "periodo_fim": "2025-03-31",
        "faturamento_total": "300.00",
        "percentual_comissao": 40,
        "lancamentos": [
            {"barbeiro_id": a.pk, "servico_id": corte.pk, "quantidade": 1},
            {"barbeiro_id": a.pk, "servico_id": barba.pk, "quantidade": 1},
            {"barbeiro_id": b.pk, "servico_id": corte.pk, "quantidade": 1},
        ],
    }
    resp = admin_api.post("/api/distribuicao/salvar/", payload, format="json")
    assert resp.status_code == 201

    dist = Distribuicao.objects.get()
    assert dist.total_minutos == 90
    assert DistribuicaoItem.objects.filter(distribuicao=dist).count() == 3
    comissoes = {c.barbeiro_id: c.valor for c in Comissao.objects.filter(mes="2025-03")}
    assert comissoes == {a.pk: Decimal("80.00"), b.pk: Decimal("40.00")}

    # salvar de novo no mesmo mês substitui a comissão
    payload["faturamento_total"] = "600.00"
    admin_api.post("/api/distribuicao/salvar/", payload, format="json")
    assert Comissao.objects.filter(mes="2025-03").count() == 2
    assert Comissao.objects.get(barbeiro=a, mes="2025-03").valor == Decimal("160.00")

    detalhe = admin_api.get(f"/api/distribuicao/{dist.pk}/")
    assert detalhe.status_code == 200
    assert len(detalhe.data["itens"]) == 3
    assert admin_api.get("/api/distribuicao/").data[0]["faturamento_total"] == Decimal("600.00")


def test_calcular_barbeiro_inexistente(admin_api, cenario):
    a, _, _, corte, _ = cenario
    resp = admin_api.post("/api/distribuicao/calcular/", {
        "faturamento_total": "100.00",
        "lancamentos": [{"barbeiro_id": a.pk, "servico_id": corte.pk, "quantidade": 1}],
        "barbeiros": [a.pk, 99999],
    }, format="json")
    assert resp.status_code == 400
    assert "99999" in resp.data["message"]


def test_salvar_barbeiro_inexistente_nao_grava_nada(admin_api, cenario):
    a, _, _, corte, _ = cenario
    resp = admin_api.post("/api/distribuicao/salvar/", {
        "periodo_inicio": "2025-03-01",
        "periodo_fim": "2025-03-31",
        "faturamento_total": "100.00",
        "lancamentos": [{"barbeiro_id": a.pk, "servico_id": corte.pk, "quantidade": 1}],
        "barbeiros": [a.pk, 99999],
    }, format="json")
    assert resp.status_code == 400
    assert "99999" in resp.data["message"]
    assert not Distribuicao.objects.exists()
    assert not Comissao.objects.exists()


def test_salvar_de_novo_remove_comissao_de_quem_saiu(admin_api, cenario):
    a, b, _, corte, _ = cenario
    payload = {
        "periodo_inicio": "2025-03-01",
        "periodo_fim": "2025-03-31",
        "faturamento_total": "300.00",
        "lancamentos": [
            {"barbeiro_id": a.pk, "servico_id": corte.pk, "quantidade": 1},
            {"barbeiro_id": b.pk, "servico_id": corte.pk, "quantidade": 1},
        ],
    }
    assert admin_api.post("/api/distribuicao/salvar/", payload, format="json").status_code == 201
    assert Comissao.objects.get(barbeiro=b, mes="2025-03").valor == Decimal("60.00")

    payload["lancamentos"] = payload["lancamentos"][:1]
    assert admin_api.post("/api/distribuicao/salvar/", payload, format="json").status_code == 201

    assert not Comissao.objects.filter(barbeiro=b, mes="2025-03").exists()
    assert Comissao.objects.get(barbeiro=a, mes="2025-03").valor == Decimal("120.00")
    assert admin_api.get(f"/api/comissoes/barbeiro/{b.pk}/").data == []


def test_salvar_periodo_invertido(admin_api, cenario):
    resp = admin_api.post("/api/distribuicao/salvar/", {
        "periodo_inicio": "2025-03-31",
        "periodo_fim": "2025-03-01",
        "faturamento_total": "10.00",
    }, format="json")
    assert resp.status_code == 400


# ------------------------------------------------------------
# relatórios do mês
# ------------------------------------------------------------
@pytest.fixture
def mes_com_atendimentos(cenario):
    a, b, c, corte, barba = cenario
    Atendimento.objects.create(barbeiro=a, servico=corte, quantidade=2, data_atendimento=_aware(2025, 3, 5))
    Atendimento.objects.create(barbeiro=b, servico=barba, quantidade=1, data_atendimento=_aware(2025, 3, 6))
    Atendimento.objects.create(barbeiro=b, servico=barba, quantidade=9, data_atendimento=_aware(2025, 4, 1))
    Cliente.objects.create(
        nome="Assinante", email="a@x.com", plano_valor=Decimal("150.00"),
        status_assinatura=StatusAssinatura.ATIVO, data_inicio_assinatura=date(2025, 3, 10),
    )
    Cliente.objects.create(
        nome="Outro mês", email="b@x.com", plano_valor=Decimal("999.00"),
        status_assinatura=StatusAssinatura.ATIVO, data_inicio_assinatura=date(2025, 2, 10),
    )
    return cenario


def test_relatorio_mensal(admin_api, mes_com_atendimentos):
    resp = admin_api.get("/api/comissao/barbeiros/?mes=2025-03")
    assert resp.status_code == 200
    linhas = resp.data
    assert [l["barbeiro"]["nome"] for l in linhas] == ["Ana", "Bruno", "Caio"]
    assert linhas[0]["faturamento_assinatura"] == Decimal("100.00")
    assert linhas[0]["comissao_assinatura"] == Decimal("40.00")
    assert linhas[0]["horas_trabalhadas_mes"] == "1h"
    assert linhas[0]["numero_servicos"] == 2
    assert linhas[1]["minutos_trabalhados_mes"] == 30
    assert linhas[2]["faturamento_assinatura"] == Decimal("0.00")


def test_relatorio_barbeiro_ve_so_a_propria_linha(barbeiro_logado, mes_com_atendimentos):
    client, barbeiro = barbeiro_logado
    resp = client.get("/api/comissao/barbeiros/?mes=2025-03")
    assert resp.status_code == 200
    assert [l["barbeiro"]["id"] for l in resp.data] == [barbeiro.pk]


def test_estatisticas_do_mes(admin_api, mes_com_atendimentos):
    resp = admin_api.get("/api/comissao/stats/?mes=2025-03")
    assert resp.data["faturamento_total_assinatura"] == Decimal("150.00")
    assert resp.data["total_minutos_gerais"] == 90
    assert resp.data["total_comissao"] == Decimal("60.00")


def test_mes_invalido(admin_api):
    resp = admin_api.get("/api/comissao/stats/?mes=2025-13")
    assert resp.status_code == 400


def test_comissao_atual_usa_receita_de_assinaturas_sem_distribuicao(admin_api, mes_com_atendimentos):
    a, *_ = mes_com_atendimentos
    resp = admin_api.get(f"/api/comissao-atual/{a.pk}/2025-03/")
    assert resp.status_code == 200
    assert resp.data["fonte"] == "assinaturas"
    assert resp.data["minutos_trabalhados_mes"] == 60
    assert resp.data["faturamento_proporcional"] == Decimal("100.00")
    assert resp.data["comissao_calculada"] == Decimal("40.00")


def test_comissao_atual_usa_ultima_distribuicao(admin_api, mes_com_atendimentos):
    a, *_ = mes_com_atendimentos
    Distribuicao.objects.create(
        periodo_inicio=date(2025, 3, 1), periodo_fim=date(2025, 3, 31),
        faturamento_total=Decimal("900.00"), percentual_comissao=50,
    )
    resp = admin_api.get(f"/api/comissao-atual/{a.pk}/2025-03/")
    assert resp.data["fonte"] == "distribuicao"
    assert resp.data["faturamento_proporcional"] == Decimal("600.00")
    assert resp.data["comissao_calculada"] == Decimal("300.00")


def test_comissao_atual_de_outro_barbeiro_e_proibida(barbeiro_logado, mes_com_atendimentos):
    client, _ = barbeiro_logado
    a, *_ = mes_com_atendimentos
    resp = client.get(f"/api/comissao-atual/{a.pk}/2025-03/")
    assert resp.status_code == 403


def test_historico_de_comissoes(barbeiro_logado):
    client, barbeiro = barbeiro_logado
    Comissao.objects.create(barbeiro=barbeiro, mes="2025-01", valor=Decimal("10.00"))
    Comissao.objects.create(barbeiro=barbeiro, mes="2025-02", valor=Decimal("20.00"))
    resp = client.get(f"/api/comissoes/barbeiro/{barbeiro.pk}/")
    assert resp.status_code == 200
    assert [c["mes"] for c in resp.data] == ["2025-02", "2025-01"]


# ------------------------------------------------------------
# tetos mensais
# ------------------------------------------------------------
def test_total_servicos_upsert_e_validacao(admin_api, mes_com_atendimentos):
    _, _, _, corte, barba = mes_com_atendimentos
    r1 = admin_api.post("/api/total-servicos/", {"servico": corte.pk, "mes": "2025-03", "total_mes": 5}, format="json")
    r2 = admin_api.post("/api/total-servicos/", {"servico": corte.pk, "mes": "2025-03", "total_mes": 1}, format="json")
    admin_api.post("/api/total-servicos/", {"servico": barba.pk, "mes": "2025-03", "total_mes": 10}, format="json")
    assert r1.status_code == r2.status_code == 200
    assert TotalServico.objects.filter(servico=corte, mes="2025-03").get().total_mes == 1

    lista = admin_api.get("/api/total-servicos/2025-03/")
    assert len(lista.data) == 2

    resp = admin_api.get("/api/validate-limits/2025-03/")
    assert resp.data["valid"] is False
    assert resp.data["violations"] == [
        {"servico_id": corte.pk, "servico_nome": "Corte", "used": 2, "limit": 1},
    ]
