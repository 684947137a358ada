# assinaturas/tests.py
from datetime import date
from decimal import Decimal
from unittest import mock

import pytest
import requests
from django.core.cache import caches

from assinaturas import api as assinaturas_api
from assinaturas.asaas import AsaasClient, AsaasError, cliente_da_conta, clientes_configurados
from assinaturas.models import PlanoAssinatura
from assinaturas.sincronizacao import SincronizadorAsaas
from assinaturas.status import ATIVO, INADIMPLENTE, status_por_cobrancas, vencimento_por_cobrancas

HOJE = date(2025, 3, 15)


# ------------------------------------------------------------
# status por cobranças
# ------------------------------------------------------------
def test_pagamento_recente_cobre_trinta_dias():
    cob = [{"status": "RECEIVED", "paymentDate": "2025-03-01", "dueDate": "2025-03-01"}]
    assert vencimento_por_cobrancas(cob) == date(2025, 3, 31)
    assert status_por_cobrancas(cob, HOJE) == ATIVO


def test_proxima_cobranca_em_aberto_define_vencimento():
    cob = [
        {"status": "CONFIRMED", "paymentDate": "2025-02-10", "dueDate": "2025-02-10"},
        {"status": "PENDING", "dueDate": "2025-03-10"},
        {"status": "PENDING", "dueDate": "2025-04-10"},
    ]
    assert vencimento_por_cobrancas(cob) == date(2025, 3, 10)
    assert status_por_cobrancas(cob, HOJE) == INADIMPLENTE


def test_sem_cobrancas_e_so_pendentes_no_prazo():
    assert status_por_cobrancas([], HOJE) == ATIVO
    assert vencimento_por_cobrancas([]) is None
    assert status_por_cobrancas([{"status": "PENDING", "dueDate": "2025-03-20"}], HOJE) == ATIVO


def test_vencida_sem_pagamento_e_inadimplente():
    assert status_por_cobrancas([{"status": "OVERDUE", "dueDate": "2025-03-01"}], HOJE) == INADIMPLENTE


# ------------------------------------------------------------
# cliente HTTP
# ------------------------------------------------------------
def _resposta(status_code=200, json=None):
    r = mock.Mock()
    r.status_code = status_code
    r.ok = status_code < 400
    r.json.return_value = json if json is not None else {}
    r.text = ""
    return r


def _client(*respostas, **kw):
    session = mock.Mock()
    session.request.side_effect = list(respostas)
    return AsaasClient("chave-teste", conta="ASAAS_PRINCIPAL", base_url="https://asaas.test/v3",
                       timeout=5, session=session, **kw), session


def test_listar_percorre_paginas():
    api, session = _client(
        _resposta(json={"data": [{"id": "cus_1"}], "hasMore": True}),
        _resposta(json={"data": [{"id": "cus_2"}], "hasMore": False}),
    )
    assert [c["id"] for c in api.listar_clientes()] == ["cus_1", "cus_2"]

    primeira, segunda = session.request.call_args_list
    assert primeira.args == ("GET", "https://asaas.test/v3/customers")
    assert primeira.kwargs["params"] == {"offset": 0, "limit": 100}
    assert segunda.kwargs["params"] == {"offset": 100, "limit": 100}
    assert primeira.kwargs["headers"]["access_token"] == "chave-teste"
    assert primeira.kwargs["timeout"] == 5


def test_filtros_vazios_nao_vao_na_query():
    api, session = _client(_resposta(json={"data": [], "hasMore": False}))
    api.listar_assinaturas(status="ACTIVE")
    assert session.request.call_args.kwargs["params"] == {"status": "ACTIVE", "offset": 0, "limit": 100}


def test_erro_http_vira_asaas_error():
    api, _ = _client(_resposta(400, {"errors": [{"code": "invalid_cpfCnpj"}]}))
    with pytest.raises(AsaasError) as exc:
        api.criar_cliente({"name": "Ana", "cpfCnpj": "123"})
    assert exc.value.status_code == 400
    assert exc.value.payload == {"errors": [{"code": "invalid_cpfCnpj"}]}


def test_falha_de_rede_vira_asaas_error():
    api, _ = _client(requests.ConnectionError("sem rota"))
    with pytest.raises(AsaasError) as exc:
        api.listar_pagamentos()
    assert exc.value.status_code is None


def test_chave_nao_aparece_no_repr():
    api, _ = _client()
    assert "chave-teste" not in repr(api)


def test_contas_sem_chave_sao_ignoradas(settings):
    settings.ASAAS_ACCOUNTS = {"ASAAS_PRINCIPAL": "k1", "ASAAS_ANDREY": ""}
    assert list(clientes_configurados()) == ["ASAAS_PRINCIPAL"]
    with pytest.raises(AsaasError):
        cliente_da_conta("ASAAS_ANDREY")


# ------------------------------------------------------------
# sincronizador (cache + agregação)
# ------------------------------------------------------------
class FakeConta:
    def __init__(self, clientes=None, erro=None):
        self.clientes = clientes or []
        self.erro = erro
        self.chamadas = 0

    def listar_clientes(self):
        self.chamadas += 1
        if self.erro:
            raise self.erro
        return self.clientes

    def listar_assinaturas(self, status=None):
        return []

    def listar_pagamentos(self, status=None):
        return []


def test_leitura_usa_cache():
    conta = FakeConta([{"id": "cus_1"}])
    sinc = SincronizadorAsaas({"A": conta}, caches["asaas"], ttl=60)
    sinc.clientes_da_conta("A")
    sinc.clientes_da_conta("A")
    assert conta.chamadas == 1

    sinc.clientes_da_conta("A", forcar=True)
    assert conta.chamadas == 2


def test_falha_do_gateway_devolve_ultimo_valor_em_cache():
    conta = FakeConta([{"id": "cus_1"}])
    sinc = SincronizadorAsaas({"A": conta}, caches["asaas"], ttl=60)
    sinc.clientes_da_conta("A")

    conta.erro = AsaasError("fora do ar", status_code=503)
    assert sinc.clientes_da_conta("A", forcar=True) == [{"id": "cus_1"}]

    sinc.limpar()
    with pytest.raises(AsaasError):
        sinc.clientes_da_conta("A")


def test_agregar_tolera_falha_parcial():
    sinc = SincronizadorAsaas(
        {"A": FakeConta([{"id": "cus_1"}]), "B": FakeConta(erro=AsaasError("401", status_code=401))},
        caches["asaas"],
    )
    itens, falhas = sinc.listar_clientes()
    assert itens == [{"id": "cus_1", "conta": "A"}]
    assert falhas == [{"conta": "B", "message": "401", "status_code": 401}]


def test_agregar_levanta_se_todas_falharem():
    sinc = SincronizadorAsaas({"A": FakeConta(erro=AsaasError("x", status_code=500))}, caches["asaas"])
    with pytest.raises(AsaasError):
        sinc.listar_clientes()
    with pytest.raises(AsaasError):
        SincronizadorAsaas({}, caches["asaas"]).listar_clientes()


# ------------------------------------------------------------
# API
# ------------------------------------------------------------
def test_listar_clientes_api(recepcao_api, monkeypatch):
    sinc = SincronizadorAsaas({"A": FakeConta([{"id": "cus_1"}])}, caches["asaas"])
    monkeypatch.setattr(assinaturas_api, "get_sincronizador", lambda: sinc)
    resp = recepcao_api.get("/api/asaas/clientes/")
    assert resp.status_code == 200
    assert resp.data["total"] == 1
    assert resp.data["clientes"][0]["conta"] == "A"


@pytest.mark.parametrize("status_gateway, esperado", [(401, 400), (503, 500), (None, 500)])
def test_erro_do_gateway_na_api(recepcao_api, monkeypatch, status_gateway, esperado):
    erro = AsaasError("falhou", status_code=status_gateway, payload={"errors": []})
    sinc = SincronizadorAsaas({"A": FakeConta(erro=erro)}, caches["asaas"])
    monkeypatch.setattr(assinaturas_api, "get_sincronizador", lambda: sinc)
    resp = recepcao_api.get("/api/asaas/clientes/")
    assert resp.status_code == esperado
    assert resp.data["error"] == {"errors": []}


def test_sem_contas_configuradas_da_500(recepcao_api, settings):
    settings.ASAAS_ACCOUNTS = {"ASAAS_PRINCIPAL": "", "ASAAS_ANDREY": ""}
    assert recepcao_api.get("/api/asaas/pagamentos/").status_code == 500


def test_criar_cliente_envia_payload_e_limpa_cache(recepcao_api, monkeypatch):
    api, session = _client(_resposta(200, {"id": "cus_9", "name": "Ana"}))
    monkeypatch.setattr(assinaturas_api, "cliente_da_conta", lambda conta=None: api)
    caches["asaas"].set("asaas:ASAAS_PRINCIPAL:clientes", [])

    resp = recepcao_api.post("/api/asaas/criar-cliente/", {
        "nome": "Ana", "email": "ana@exemplo.com", "telefone": "11999990000",
    }, format="json")

    assert resp.status_code == 201
    assert resp.data == {"conta": "ASAAS_PRINCIPAL", "cliente": {"id": "cus_9", "name": "Ana"}}
    assert session.request.call_args.kwargs["json"] == {
        "name": "Ana", "email": "ana@exemplo.com", "mobilePhone": "11999990000",
    }
    assert caches["asaas"].get("asaas:ASAAS_PRINCIPAL:clientes") is None


def test_criar_assinatura_rejeitada_pelo_gateway(recepcao_api, monkeypatch):
    api, session = _client(_resposta(400, {"errors": [{"code": "invalid_customer"}]}))
    monkeypatch.setattr(assinaturas_api, "cliente_da_conta", lambda conta=None: api)
    resp = recepcao_api.post("/api/asaas/criar-assinatura/", {
        "customer": "cus_x", "valor": "89.90", "proximo_vencimento": "2025-04-01",
    }, format="json")

    assert resp.status_code == 400
    assert resp.data["error"] == {"errors": [{"code": "invalid_customer"}]}
    enviado = session.request.call_args.kwargs["json"]
    assert enviado["value"] == 89.9
    assert enviado["cycle"] == "MONTHLY"
    assert "description" not in enviado


def test_criar_assinatura_valida_valor(recepcao_api):
    resp = recepcao_api.post("/api/asaas/criar-assinatura/", {
        "customer": "cus_x", "valor": "0", "proximo_vencimento": "2025-04-01",
    }, format="json")
    assert resp.status_code == 400


def test_limpar_cache_so_admin(admin_api, recepcao_api):
    assert recepcao_api.delete("/api/asaas/cache/").status_code == 403
    assert admin_api.delete("/api/asaas/cache/").status_code == 204


def test_asaas_fechado_para_barbeiro(barbeiro_logado):
    client, _ = barbeiro_logado
    assert client.get("/api/asaas/clientes/").status_code == 403


# ------------------------------------------------------------
# planos
# ------------------------------------------------------------
def test_planos_crud(admin_api, barbeiro_logado, make_servico):
    corte = make_servico("Corte")
    resp = admin_api.post("/api/planos/", {
        "nome": "Clube Corte", "valor_mensal": "79.90", "servicos_incluidos": [corte.pk],
    }, format="json")
    assert resp.status_code == 201
    assert resp.data["valor_mensal"] == Decimal("79.90")

    client, _ = barbeiro_logado
    assert client.get("/api/planos/").status_code == 200
    assert client.post("/api/planos/", {"nome": "X", "valor_mensal": "10.00"}, format="json").status_code == 403

    plano = PlanoAssinatura.objects.get()
    assert list(plano.servicos_incluidos.all()) == [corte]


def test_plano_valor_zero(admin_api):
    resp = admin_api.post("/api/planos/", {"nome": "Grátis", "valor_mensal": "0.00"}, format="json")
    assert resp.status_code == 400
    assert "valor_mensal" in resp.data["errors"]
