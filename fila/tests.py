# fila/tests.py
from datetime import date
from unittest import mock

import pytest
from django.utils import timezone

from agendamentos.models import Atendimento
from fila import services
from fila.models import AtendimentoDiario, OrdemFila
from fila.ordenacao import PosicaoFila, ordenar_fila, proximo_da_vez

DIA = date(2025, 3, 10)
MES = "2025-03"


# ------------------------------------------------------------
# ordenação pura
# ------------------------------------------------------------
def test_empate_mantem_ordem_de_entrada():
    b = PosicaoFila(barbeiro_id=2, nome="B", total_atendimentos_mes=2)
    a = PosicaoFila(barbeiro_id=1, nome="A", total_atendimentos_mes=2)
    assert [p.nome for p in ordenar_fila([b, a])] == ["B", "A"]


def test_menos_atendimentos_primeiro():
    fila = ordenar_fila([
        PosicaoFila(1, "A", 3),
        PosicaoFila(2, "B", 1),
        PosicaoFila(3, "C", 1),
        PosicaoFila(4, "D", 0, ativo=False),
    ])
    assert [(p.nome, p.posicao) for p in fila] == [("B", 1), ("C", 2), ("A", 3)]


def test_proximo_sem_ativos():
    assert proximo_da_vez([PosicaoFila(1, "A", ativo=False)]) is None
    assert proximo_da_vez([]) is None


# ------------------------------------------------------------
# serviços
# ------------------------------------------------------------
@pytest.fixture
def tres(make_barbeiro):
    return make_barbeiro("Ana"), make_barbeiro("Bruno"), make_barbeiro("Caio")


def _total(barbeiro, mes=MES):
    return next(e for e in services.entradas_do_mes(mes) if e.barbeiro_id == barbeiro.pk)


def test_novo_barbeiro_entra_no_fim_da_fila(tres, make_barbeiro):
    novo = make_barbeiro("Davi")
    posicoes = list(OrdemFila.objects.values_list("barbeiro_id", "posicao"))
    assert posicoes[-1] == (novo.pk, 4)
    assert [b for b, _ in posicoes] == [tres[0].pk, tres[1].pk, tres[2].pk, novo.pk]


def test_adicionar_automatico_segue_a_fila(tres):
    ana, bruno, caio = tres
    atendidos = [services.adicionar_atendimento(data=DIA).barbeiro_id for _ in range(4)]
    assert atendidos == [ana.pk, bruno.pk, caio.pk, ana.pk]
    assert _total(ana).total_atendimentos_mes == 2


def test_adicionar_manual_ignora_posicao(tres):
    _, _, caio = tres
    linha = services.adicionar_atendimento(caio.pk, DIA)
    assert linha.barbeiro_id == caio.pk
    assert linha.atendimentos_diarios == 1
    assert services.proximo(MES).barbeiro_id == tres[0].pk


def test_passar_vez_afeta_so_o_barbeiro(tres):
    ana, bruno, _ = tres
    services.adicionar_atendimento(bruno.pk, DIA)
    linha = services.passar_vez(ana.pk, DIA)

    assert (linha.atendimentos_diarios, linha.vezes_passou) == (1, 1)
    b = AtendimentoDiario.objects.get(barbeiro=bruno, data=DIA)
    assert (b.atendimentos_diarios, b.vezes_passou) == (1, 0)
    assert _total(ana).vezes_passou_mes == 1
    assert not AtendimentoDiario.objects.filter(barbeiro=tres[2]).exists()


def test_mutacoes_da_fila_travam_a_ordem(tres):
    ana, bruno, _ = tres
    with mock.patch.object(services, "_travar_fila", wraps=services._travar_fila) as trava:
        services.passar_vez(ana.pk, DIA)
        assert trava.call_count == 1
        services.adicionar_atendimento(bruno.pk, DIA)
        services.adicionar_atendimento(data=DIA)
    assert trava.call_count == 3


def test_passar_vez_fora_da_rotacao_nao_conta(tres):
    ana, *_ = tres
    services.alternar_ativo(ana)
    with pytest.raises(ValueError):
        services.passar_vez(ana.pk, DIA)
    assert not AtendimentoDiario.objects.filter(barbeiro=ana).exists()


def test_zerar_mantem_linhas_e_flags(tres, make_servico):
    ana, bruno, caio = tres
    services.alternar_ativo(caio)
    services.adicionar_atendimento(ana.pk, DIA)
    services.passar_vez(bruno.pk, DIA)
    servico = make_servico("Corte")
    Atendimento.objects.create(barbeiro=ana, servico=servico)

    n = services.zerar_mes(MES)

    assert n == 2
    assert AtendimentoDiario.objects.filter(mes=MES).count() == 2
    assert all(
        (l.atendimentos_diarios, l.vezes_passou) == (0, 0)
        for l in AtendimentoDiario.objects.filter(mes=MES)
    )
    assert OrdemFila.objects.get(barbeiro=caio).ativo is False
    assert Atendimento.objects.count() == 1


def test_zerar_nao_afeta_outros_meses(tres):
    ana, *_ = tres
    services.adicionar_atendimento(ana.pk, date(2025, 2, 28))
    services.zerar_mes(MES)
    assert _total(ana, "2025-02").total_atendimentos_mes == 1


def test_inativo_sai_da_rotacao_mas_mantem_contagem(tres):
    ana, bruno, _ = tres
    services.adicionar_atendimento(bruno.pk, DIA)
    services.alternar_ativo(ana)

    dados = services.fila_do_mes(MES)
    assert [p.barbeiro_id for p in dados["fila"]] == [tres[2].pk, bruno.pk]
    assert [p.barbeiro_id for p in dados["inativos"]] == [ana.pk]

    services.alternar_ativo(ana)
    assert services.proximo(MES).barbeiro_id == ana.pk


def test_barbeiro_desativado_no_cadastro_fica_fora(tres):
    ana, *_ = tres
    ana.ativo = False
    ana.save()
    assert ana.pk not in [p.barbeiro_id for p in services.fila_do_mes(MES)["fila"]]
    with pytest.raises(ValueError):
        services.adicionar_atendimento(ana.pk, DIA)


def test_adicionar_sem_ativos(tres):
    for b in tres:
        services.alternar_ativo(b)
    with pytest.raises(ValueError):
        services.adicionar_atendimento(data=DIA)


def test_reordenar(tres):
    ana, bruno, caio = tres
    services.reordenar([caio.pk, ana.pk])
    assert list(OrdemFila.objects.values_list("barbeiro_id", flat=True)) == [caio.pk, ana.pk, bruno.pk]
    assert services.proximo(MES).barbeiro_id == caio.pk


def test_reordenar_rejeita_repetidos(tres):
    with pytest.raises(ValueError):
        services.reordenar([tres[0].pk, tres[0].pk])


def test_inicializar_cria_entradas_que_faltam(tres):
    OrdemFila.objects.filter(barbeiro=tres[1]).delete()
    assert services.inicializar_ordem() == 1
    assert OrdemFila.objects.get(barbeiro=tres[1]).posicao == 4
    assert services.inicializar_ordem() == 0


# ------------------------------------------------------------
# API
# ------------------------------------------------------------
def test_fila_mensal_api(recepcao_api, tres):
    ana, bruno, caio = tres
    services.adicionar_atendimento(ana.pk, DIA)
    resp = recepcao_api.get(f"/api/lista-da-vez/fila-mensal/{MES}/")
    assert resp.status_code == 200
    assert [(p["nome"], p["posicao"]) for p in resp.data["fila"]] == [("Bruno", 1), ("Caio", 2), ("Ana", 3)]
    assert resp.data["proximo"]["barbeiro_id"] == bruno.pk


def test_adicionar_atendimento_api(recepcao_api, tres):
    hoje = timezone.localdate()
    resp = recepcao_api.post("/api/lista-da-vez/adicionar-atendimento/", {}, format="json")
    assert resp.status_code == 201
    assert resp.data["modo"] == "automatico"
    assert resp.data["atendimento"]["barbeiro"] == tres[0].pk
    assert resp.data["atendimento"]["data"] == hoje.isoformat()


def test_adicionar_manual_em_inativo_da_400(recepcao_api, tres):
    services.alternar_ativo(tres[1])
    resp = recepcao_api.post(
        "/api/lista-da-vez/adicionar-atendimento/", {"barbeiro_id": tres[1].pk}, format="json"
    )
    assert resp.status_code == 400


def test_adicionar_sem_ativos_da_400(recepcao_api, tres):
    for b in tres:
        services.alternar_ativo(b)
    resp = recepcao_api.post("/api/lista-da-vez/adicionar-atendimento/", {}, format="json")
    assert resp.status_code == 400
    assert resp.data["message"] == "Nenhum barbeiro ativo na fila."


def test_passar_vez_e_zerar_api(recepcao_api, tres):
    ana, *_ = tres
    resp = recepcao_api.post("/api/lista-da-vez/passar-vez/", {"barbeiro_id": ana.pk, "data": "2025-03-10"}, format="json")
    assert resp.status_code == 200
    assert resp.data["atendimento"]["vezes_passou"] == 1

    resp = recepcao_api.post("/api/lista-da-vez/zerar/", {"mes": MES}, format="json")
    assert resp.status_code == 200
    assert resp.data["linhas"] == 1


def test_linha_do_dia_duplicada_da_409(recepcao_api, tres):
    payload = {"barbeiro": tres[0].pk, "data": "2025-03-10", "atendimentos_diarios": 2}
    r1 = recepcao_api.post("/api/lista-da-vez/atendimentos/", payload, format="json")
    r2 = recepcao_api.post("/api/lista-da-vez/atendimentos/", payload, format="json")
    assert r1.status_code == 201
    assert r1.data["mes"] == MES
    assert r2.status_code == 409
    assert AtendimentoDiario.objects.count() == 1


def test_salvar_dia_faz_upsert(recepcao_api, tres):
    ana, bruno, _ = tres
    services.adicionar_atendimento(ana.pk, DIA)
    resp = recepcao_api.post("/api/lista-da-vez/salvar/", {
        "data": "2025-03-10",
        "atendimentos": [
            {"barbeiro_id": ana.pk, "atendimentos_diarios": 5, "vezes_passou": 1},
            {"barbeiro_id": bruno.pk, "atendimentos_diarios": 3},
        ],
    }, format="json")
    assert resp.status_code == 200
    assert AtendimentoDiario.objects.get(barbeiro=ana, data=DIA).atendimentos_diarios == 5
    assert AtendimentoDiario.objects.count() == 2

    dia = recepcao_api.get("/api/lista-da-vez/atendimentos/2025-03-10/")
    assert len(dia.data) == 2


def test_ordem_fila_api(recepcao_api, tres):
    ana, bruno, caio = tres
    resp = recepcao_api.post("/api/ordem-fila/reordenar/", {"ordem": [bruno.pk, caio.pk, ana.pk]}, format="json")
    assert resp.status_code == 200
    assert [o["barbeiro"] for o in resp.data] == [bruno.pk, caio.pk, ana.pk]

    resp = recepcao_api.post(f"/api/ordem-fila/{bruno.pk}/toggle/")
    assert resp.data["ativo"] is False
    assert recepcao_api.get("/api/lista-da-vez/proximo/").data["proximo"]["barbeiro_id"] == caio.pk

    assert recepcao_api.post("/api/ordem-fila/9999/toggle/").status_code == 404


def test_barbeiro_ve_a_propria_posicao(barbeiro_logado, tres):
    client, barbeiro = barbeiro_logado
    resp = client.get(f"/api/lista-da-vez/barbeiro/{barbeiro.pk}/{MES}/")
    assert resp.status_code == 200
    assert resp.data["posicao"] == 1  # cadastrado antes dos outros
    assert resp.data["total_na_fila"] == 4

    assert client.get(f"/api/lista-da-vez/barbeiro/{tres[0].pk}/{MES}/").status_code == 403
    assert client.get(f"/api/lista-da-vez/fila-mensal/{MES}/").status_code == 403
