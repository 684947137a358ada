# agendamentos/tests.py
from datetime import datetime, timezone as dt_timezone

import pytest
from django.utils import timezone

from agendamentos.models import Agendamento, Atendimento, StatusAgendamento
from clientes.models import Cliente


def _dt(*args):
    return timezone.make_aware(datetime(*args))


@pytest.fixture
def corte(make_servico):
    return make_servico("Corte", duracao_min=30)


@pytest.fixture
def barba(make_servico):
    return make_servico("Barba", duracao_min=20)


@pytest.fixture
def agendamento(make_barbeiro, corte):
    return Agendamento.objects.create(
        cliente_nome="João", barbeiro=make_barbeiro("Ana"), servico=corte, data_hora=_dt(2025, 3, 10, 14, 0),
    )


# ------------------------------------------------------------
# regras do modelo
# ------------------------------------------------------------
def test_finalizar_lanca_um_atendimento(agendamento):
    a1 = agendamento.finalizar()
    a2 = agendamento.finalizar()

    assert a1.pk == a2.pk
    assert Atendimento.objects.count() == 1
    assert agendamento.status == StatusAgendamento.FINALIZADO
    assert (a1.barbeiro_id, a1.servico_id, a1.quantidade) == (agendamento.barbeiro_id, agendamento.servico_id, 1)
    assert a1.mes == "2025-03"


def test_cancelado_nao_finaliza(agendamento):
    agendamento.cancelar()
    agendamento.cancelar()
    with pytest.raises(ValueError):
        agendamento.finalizar()
    assert not Atendimento.objects.exists()


def test_finalizado_nao_cancela(agendamento):
    agendamento.finalizar()
    with pytest.raises(ValueError):
        agendamento.cancelar()


def test_mes_segue_fuso_local(make_barbeiro, corte):
    # 01/04 01:00 UTC ainda é 31/03 em São Paulo
    a = Atendimento.objects.create(
        barbeiro=make_barbeiro(), servico=corte,
        data_atendimento=datetime(2025, 4, 1, 1, 0, tzinfo=dt_timezone.utc),
    )
    assert a.mes == "2025-03"


def test_nome_do_cliente_vem_do_cadastro(make_barbeiro, corte, db):
    cliente = Cliente.objects.create(nome="Maria", email="maria@exemplo.com")
    ag = Agendamento.objects.create(cliente=cliente, barbeiro=make_barbeiro(), servico=corte,
                                    data_hora=_dt(2025, 3, 10, 9, 0))
    assert ag.cliente_nome == "Maria"


# ------------------------------------------------------------
# API de agendamentos
# ------------------------------------------------------------
def test_criar_e_filtrar_por_dia(recepcao_api, make_barbeiro, corte):
    ana = make_barbeiro("Ana")
    for dia in (10, 10, 11):
        resp = recepcao_api.post("/api/agendamentos/", {
            "cliente_nome": "João", "barbeiro": ana.pk, "servico": corte.pk,
            "data_hora": _dt(2025, 3, dia, 10, 0).isoformat(),
        }, format="json")
        assert resp.status_code == 201
        assert resp.data["status"] == StatusAgendamento.AGENDADO

    assert len(recepcao_api.get("/api/agendamentos/?date=2025-03-10").data) == 2
    assert recepcao_api.get("/api/agendamentos/?date=10/03/2025").status_code == 400
    assert len(recepcao_api.get(f"/api/agendamentos/?barbeiro={ana.pk}").data) == 3
    assert recepcao_api.get("/api/agendamentos/?barbeiro=abc").status_code == 400


def test_criar_exige_cliente_e_barbeiro_ativo(recepcao_api, make_barbeiro, corte):
    inativo = make_barbeiro("Inativo", ativo=False)
    resp = recepcao_api.post("/api/agendamentos/", {
        "cliente_nome": "João", "barbeiro": inativo.pk, "servico": corte.pk,
        "data_hora": _dt(2025, 3, 10, 10, 0).isoformat(),
    }, format="json")
    assert resp.status_code == 400
    assert "barbeiro" in resp.data["errors"]

    resp = recepcao_api.post("/api/agendamentos/", {
        "barbeiro": make_barbeiro("Ana").pk, "servico": corte.pk,
        "data_hora": _dt(2025, 3, 10, 10, 0).isoformat(),
    }, format="json")
    assert resp.status_code == 400


def test_finalizar_via_api(recepcao_api, agendamento):
    url = f"/api/agendamentos/{agendamento.pk}/finalizar/"
    r1 = recepcao_api.patch(url)
    r2 = recepcao_api.patch(url)
    assert r1.status_code == r2.status_code == 200
    assert r1.data["atendimento"]["id"] == r2.data["atendimento"]["id"]
    assert r1.data["atendimento"]["agendamento"] == agendamento.pk
    assert Atendimento.objects.count() == 1


def test_cancelado_nao_finaliza_via_api(recepcao_api, agendamento):
    assert recepcao_api.patch(f"/api/agendamentos/{agendamento.pk}/cancelar/").status_code == 200
    resp = recepcao_api.patch(f"/api/agendamentos/{agendamento.pk}/finalizar/")
    assert resp.status_code == 400
    assert resp.data["message"] == "Agendamentos cancelados não podem ser finalizados."


def test_so_agendado_pode_ser_editado(recepcao_api, agendamento):
    agendamento.finalizar()
    resp = recepcao_api.patch(f"/api/agendamentos/{agendamento.pk}/", {"observacoes": "x"}, format="json")
    assert resp.status_code == 400


def test_barbeiro_ve_so_a_propria_agenda(barbeiro_logado, agendamento, corte):
    client, carlos = barbeiro_logado
    Agendamento.objects.create(cliente_nome="Pedro", barbeiro=carlos, servico=corte, data_hora=_dt(2025, 3, 10, 15, 0))

    resp = client.get("/api/agendamentos/")
    assert [a["cliente_nome"] for a in resp.data] == ["Pedro"]
    assert client.get(f"/api/agendamentos/{agendamento.pk}/").status_code == 404
    assert client.patch(f"/api/agendamentos/{agendamento.pk}/finalizar/").status_code == 403


# ------------------------------------------------------------
# livro de atendimentos
# ------------------------------------------------------------
def test_quantidade_minima(recepcao_api, make_barbeiro, corte):
    resp = recepcao_api.post("/api/atendimentos/", {
        "barbeiro": make_barbeiro().pk, "servico": corte.pk, "quantidade": 0,
    }, format="json")
    assert resp.status_code == 400


def test_resumo_por_servico(barbeiro_logado, recepcao_api, make_barbeiro, corte, barba):
    client, carlos = barbeiro_logado
    Atendimento.objects.create(barbeiro=carlos, servico=corte, quantidade=2, data_atendimento=_dt(2025, 3, 3, 10))
    Atendimento.objects.create(barbeiro=carlos, servico=corte, quantidade=1, data_atendimento=_dt(2025, 3, 5, 10))
    Atendimento.objects.create(barbeiro=carlos, servico=barba, quantidade=3, data_atendimento=_dt(2025, 3, 5, 11))
    Atendimento.objects.create(barbeiro=carlos, servico=barba, quantidade=1, data_atendimento=_dt(2025, 4, 1, 11))

    resp = client.get(f"/api/atendimentos/resumo/{carlos.pk}/2025-03/")
    assert resp.status_code == 200
    assert resp.data["total_atendimentos"] == 6
    assert resp.data["total_minutos"] == 150
    assert resp.data["tempo_formatado"] == "2h 30min"
    servicos = {s["servico_nome"]: s for s in resp.data["servicos"]}
    assert servicos["Corte"]["total_quantidade"] == 3
    assert servicos["Corte"]["dias"] == [
        {"data": "2025-03-03", "quantidade": 2},
        {"data": "2025-03-05", "quantidade": 1},
    ]
    assert servicos["Barba"]["total_minutos"] == 60

    outro = make_barbeiro("Outro")
    assert client.get(f"/api/atendimentos/resumo/{outro.pk}/2025-03/").status_code == 403
    assert recepcao_api.get(f"/api/atendimentos/resumo/{outro.pk}/2025-03/").data["total_atendimentos"] == 0


def test_listagem_por_mes(recepcao_api, make_barbeiro, corte):
    ana = make_barbeiro("Ana")
    Atendimento.objects.create(barbeiro=ana, servico=corte, data_atendimento=_dt(2025, 3, 3, 10))
    Atendimento.objects.create(barbeiro=ana, servico=corte, data_atendimento=_dt(2025, 4, 3, 10))
    resp = recepcao_api.get("/api/atendimentos/?mes=2025-03")
    assert [a["mes"] for a in resp.data] == ["2025-03"]
    assert recepcao_api.get("/api/atendimentos/?barbeiro=ana").status_code == 400


def test_barbeiro_com_historico_nao_e_excluido(admin_api, make_barbeiro, corte):
    ana = make_barbeiro("Ana")
    Atendimento.objects.create(barbeiro=ana, servico=corte)
    resp = admin_api.delete(f"/api/barbeiros/{ana.pk}/")
    assert resp.status_code == 409
    assert Atendimento.objects.filter(barbeiro=ana).exists()
