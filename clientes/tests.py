# clientes/tests.py
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.core.cache import caches
from django.utils import timezone

from assinaturas.asaas import AsaasError
from assinaturas.sincronizacao import SincronizadorAsaas
from clientes import api as clientes_api
from clientes import services
from clientes.models import Cliente, Origem, StatusAssinatura

HOJE = date(2025, 3, 15)
pytestmark = pytest.mark.django_db


def _cliente(nome, **kw):
    kw.setdefault("plano_nome", "Clube")
    kw.setdefault("plano_valor", Decimal("50.00"))
    return Cliente.objects.create(nome=nome, **kw)


class FakeConta:
    def __init__(self, clientes=(), assinaturas=(), pagamentos=(), erro=None):
        self.clientes = list(clientes)
        self.assinaturas = list(assinaturas)
        self.pagamentos = list(pagamentos)
        self.erro = erro

    def _ok(self, valor):
        if self.erro:
            raise self.erro
        return valor

    def listar_clientes(self):
        return self._ok(self.clientes)

    def listar_assinaturas(self, status=None):
        return self._ok([a for a in self.assinaturas if status in (None, a["status"])])

    def listar_pagamentos(self, status=None):
        return self._ok(self.pagamentos)


def _conta_principal():
    return FakeConta(
        clientes=[
            {"id": "cus_1", "name": "Ana", "email": "ana@exemplo.com", "mobilePhone": "11999990001"},
            {"id": "cus_2", "name": "Bruno", "email": "", "phone": "11999990002"},
            {"id": "cus_3", "name": "Apagado", "deleted": True},
        ],
        assinaturas=[
            {"id": "sub_1", "customer": "cus_1", "status": "ACTIVE", "value": 89.9,
             "description": "Clube Premium", "billingType": "PIX", "dateCreated": "2025-01-10"},
            {"id": "sub_2", "customer": "cus_1", "status": "ACTIVE", "value": 39.9,
             "description": "Clube Barba", "billingType": "PIX", "dateCreated": "2025-01-10"},
            {"id": "sub_3", "customer": "cus_2", "status": "INACTIVE", "value": 60},
        ],
        pagamentos=[
            {"customer": "cus_1", "status": "RECEIVED", "paymentDate": "2025-03-10", "dueDate": "2025-03-10"},
            {"customer": "cus_2", "status": "OVERDUE", "dueDate": "2025-02-10"},
        ],
    )


def _sinc(**contas):
    return SincronizadorAsaas(contas, caches["asaas"])


# ------------------------------------------------------------
# cadastro manual / lote
# ------------------------------------------------------------
def test_cadastro_manual_cria_e_depois_atualiza(recepcao_api):
    payload = {"nome": "Ana", "email": "Ana@Exemplo.com", "plano_nome": "Clube", "plano_valor": "59.90",
               "data_inicio_assinatura": "2025-03-01"}
    r1 = recepcao_api.post("/api/clientes/cadastro-manual/", payload, format="json")
    assert r1.status_code == 201
    assert r1.data["cliente"]["email"] == "ana@exemplo.com"
    assert r1.data["cliente"]["origem"] == Origem.EXTERNO
    assert r1.data["cliente"]["data_vencimento_assinatura"] == "2025-03-31"

    r2 = recepcao_api.post("/api/clientes/cadastro-manual/", {
        **payload, "telefone": "(11) 99999-0001", "plano_valor": "69.90",
    }, format="json")
    assert r2.status_code == 200
    assert r2.data["cliente"]["id"] == r1.data["cliente"]["id"]

    cliente = Cliente.objects.get()
    assert cliente.telefone == "5511999990001"
    assert cliente.plano_valor == Decimal("69.90")


def test_cadastro_manual_sem_contato(recepcao_api):
    resp = recepcao_api.post("/api/clientes/cadastro-manual/", {
        "nome": "Sem contato", "plano_nome": "Clube", "plano_valor": "50.00",
    }, format="json")
    assert resp.status_code == 400
    assert resp.data["errors"]["non_field_errors"] == ["Informe email ou telefone."]
    assert not Cliente.objects.exists()


def test_cadastro_manual_nao_apaga_contato_conhecido():
    services.cadastro_manual({"nome": "Ana", "email": "ana@exemplo.com", "telefone": "5511999990001"})
    cliente, criado = services.cadastro_manual({"nome": "Ana Souza", "email": "ana@exemplo.com", "telefone": ""})
    assert not criado
    assert cliente.nome == "Ana Souza"
    assert cliente.telefone == "5511999990001"


def test_importar_lote(recepcao_api):
    _cliente("Bia", email="bia@exemplo.com")
    resp = recepcao_api.post("/api/clientes/importar-lote/", {"clientes": [
        {"nome": "Ana", "email": "ana@exemplo.com", "plano_nome": "Clube", "plano_valor": "50"},
        {"nome": "Sem contato", "plano_nome": "Clube", "plano_valor": "50"},
        {"nome": "Bia", "email": "BIA@exemplo.com", "plano_nome": "Clube", "plano_valor": "80"},
        {"nome": "Caio", "telefone": "123", "plano_nome": "Clube", "plano_valor": "50"},
    ]}, format="json")

    assert resp.status_code == 200
    assert resp.data["total"] == 4
    assert resp.data["importados"] == 1
    assert resp.data["atualizados"] == 1
    assert [e["linha"] for e in resp.data["erros"]] == [2, 4]
    assert "telefone" in resp.data["erros"][1]["erros"]
    assert Cliente.objects.count() == 2


def test_importar_lote_vazio(recepcao_api):
    assert recepcao_api.post("/api/clientes/importar-lote/", {"clientes": []}, format="json").status_code == 400


# ------------------------------------------------------------
# vencimentos / estatísticas
# ------------------------------------------------------------
def test_vencendo_e_vencidos():
    _cliente("Ana", data_vencimento_assinatura=HOJE + timedelta(days=3))
    _cliente("Bia", data_vencimento_assinatura=HOJE + timedelta(days=20))
    _cliente("Caio", data_vencimento_assinatura=HOJE - timedelta(days=1))
    _cliente("Davi", data_vencimento_assinatura=HOJE - timedelta(days=5),
             status_assinatura=StatusAssinatura.INATIVO)

    assert [c.nome for c in services.vencendo(7, HOJE)] == ["Ana"]
    assert [c.nome for c in services.vencendo(30, HOJE)] == ["Ana", "Bia"]
    assert [c.nome for c in services.vencidos(HOJE)] == ["Caio"]


def test_vencendo_api(recepcao_api):
    hoje = timezone.localdate()
    _cliente("Ana", data_vencimento_assinatura=hoje + timedelta(days=2))
    resp = recepcao_api.get("/api/clientes/vencendo/?dias=5")
    assert [c["nome"] for c in resp.data] == ["Ana"]
    assert resp.data[0]["dias_para_vencer"] == 2

    resp = recepcao_api.get("/api/clientes/vencendo/?dias=abc")
    assert resp.status_code == 400
    assert "dias" in resp.data["message"]


def test_estatisticas():
    _cliente("Ana", plano_valor=Decimal("50.00"))
    _cliente("Bia", plano_valor=Decimal("80.00"), origem=Origem.ASAAS_PRINCIPAL, asaas_customer_id="cus_1")
    _cliente("Caio", status_assinatura=StatusAssinatura.INADIMPLENTE)

    stats = services.estatisticas(HOJE)
    assert stats["total"] == 3
    assert stats["ativos"] == 2
    assert stats["inadimplentes"] == 1
    assert stats["receita_mensal"] == Decimal("130.00")
    assert stats["por_origem"][Origem.EXTERNO] == 2
    assert stats["por_origem"][Origem.ASAAS_ANDREY] == 0


def test_receita_do_mes_conta_inicio_no_mes():
    _cliente("Ana", data_inicio_assinatura=date(2025, 3, 2))
    _cliente("Bia", data_inicio_assinatura=date(2025, 2, 28))
    assert services.receita_assinaturas_do_mes("2025-03") == Decimal("50.00")


# ------------------------------------------------------------
# visão unificada / sincronização
# ------------------------------------------------------------
def test_unificados_dedup_e_status():
    _cliente("Ana local", email="ana@exemplo.com", plano_valor=Decimal("50.00"))
    _cliente("Caio", telefone="5511988887777")

    dados = services.clientes_unificados(_sinc(ASAAS_PRINCIPAL=_conta_principal()), HOJE)

    assert dados["total"] == 3
    ativos = {c["nome"]: c for c in dados["ativos"]["clientes"]}
    assert set(ativos) == {"Ana", "Caio"}
    assert ativos["Ana"]["valor"] == 89.9
    assert ativos["Ana"]["conta"] == "ASAAS_PRINCIPAL"
    assert ativos["Ana"]["data_vencimento"] == date(2025, 4, 9)
    assert [c["nome"] for c in dados["inadimplentes"]["clientes"]] == ["Bruno"]
    assert dados["falhas"] == []


def test_unificados_sem_contas_mostra_so_locais():
    _cliente("Ana", email="ana@exemplo.com")
    dados = services.clientes_unificados(_sinc(), HOJE)
    assert dados["total"] == 1


def test_unificados_api_com_conta_fora_do_ar(recepcao_api, monkeypatch):
    sinc = _sinc(
        ASAAS_PRINCIPAL=_conta_principal(),
        ASAAS_ANDREY=FakeConta(erro=AsaasError("Asaas respondeu 401.", status_code=401)),
    )
    monkeypatch.setattr(clientes_api, "get_sincronizador", lambda: sinc)
    resp = recepcao_api.get("/api/clientes/unificados/")
    assert resp.status_code == 200
    assert resp.data["total"] == 2
    assert [f["conta"] for f in resp.data["falhas"]] == ["ASAAS_ANDREY"]


def test_sincronizar_cria_e_atualiza():
    externo = _cliente("Ana local", email="ana@exemplo.com")
    sinc = _sinc(ASAAS_PRINCIPAL=_conta_principal())

    resumo = services.sincronizar_com_asaas(sinc, HOJE)
    assert (resumo["total"], resumo["criados"], resumo["atualizados"]) == (2, 1, 1)

    externo.refresh_from_db()
    assert externo.origem == Origem.ASAAS_PRINCIPAL
    assert externo.asaas_customer_id == "cus_1"
    assert externo.plano_nome == "Clube Premium"
    assert externo.plano_valor == Decimal("89.90")
    assert externo.status_assinatura == StatusAssinatura.ATIVO

    bruno = Cliente.objects.get(asaas_customer_id="cus_2")
    assert bruno.status_assinatura == StatusAssinatura.INATIVO
    assert bruno.telefone == "5511999990002"

    again = services.sincronizar_com_asaas(sinc, HOJE)
    assert (again["criados"], again["atualizados"]) == (0, 2)
    assert Cliente.objects.count() == 2


def test_sincronizar_nao_toma_cliente_de_outra_conta():
    outro = _cliente("Ana", email="ana@exemplo.com", origem=Origem.ASAAS_ANDREY, asaas_customer_id="cus_x")
    services.sincronizar_com_asaas(_sinc(ASAAS_PRINCIPAL=_conta_principal()), HOJE)

    outro.refresh_from_db()
    assert (outro.origem, outro.asaas_customer_id) == (Origem.ASAAS_ANDREY, "cus_x")
    assert Cliente.objects.filter(asaas_customer_id="cus_1", origem=Origem.ASAAS_PRINCIPAL).exists()


# ------------------------------------------------------------
# CRUD / permissões
# ------------------------------------------------------------
def test_filtros_da_listagem(recepcao_api):
    _cliente("Ana", email="ana@exemplo.com")
    _cliente("Bruno", status_assinatura=StatusAssinatura.INADIMPLENTE)
    assert [c["nome"] for c in recepcao_api.get("/api/clientes/?q=ana").data] == ["Ana"]
    assert [c["nome"] for c in recepcao_api.get("/api/clientes/?status=inadimplente").data] == ["Bruno"]


def test_barbeiro_nao_acessa_clientes(barbeiro_logado):
    client, _ = barbeiro_logado
    assert client.get("/api/clientes/").status_code == 403
    assert client.get("/api/clientes/stats/").status_code == 403
