# core/tests.py
from datetime import date

import pytest
from django.db import IntegrityError
from django.db.models import ProtectedError

from assinaturas.asaas import AsaasError
from core.contacts import chaves_contato, normalize_email, normalize_msisdn_br, unificar_contatos
from core.erros import RegraDeNegocio
from core.exceptions import api_exception_handler
from core.periodos import formatar_minutos, limites_do_mes, parse_data, parse_inteiro, parse_mes


# ------------------------------------------------------------
# períodos
# ------------------------------------------------------------
@pytest.mark.parametrize("mes", ["2025-00", "2025-13", "25-03", "2025/03", "", None])
def test_mes_invalido(mes):
    with pytest.raises(ValueError):
        parse_mes(mes)


def test_limites_do_mes():
    assert limites_do_mes("2024-02") == (date(2024, 2, 1), date(2024, 3, 1))
    assert limites_do_mes("2025-12") == (date(2025, 12, 1), date(2026, 1, 1))


def test_parse_data():
    assert parse_data("2025-03-10") == date(2025, 3, 10)
    with pytest.raises(ValueError):
        parse_data("10/03/2025")


def test_parse_inteiro():
    assert parse_inteiro(" 7 ", "dias") == 7
    with pytest.raises(RegraDeNegocio, match="'dias'"):
        parse_inteiro("abc", "dias")


@pytest.mark.parametrize("minutos, esperado", [(0, "0min"), (45, "45min"), (60, "1h"), (150, "2h 30min")])
def test_formatar_minutos(minutos, esperado):
    assert formatar_minutos(minutos) == esperado


# ------------------------------------------------------------
# contatos
# ------------------------------------------------------------
@pytest.mark.parametrize("entrada, esperado", [
    ("(11) 99999-0001", "5511999990001"),
    ("+55 11 99999-0001", "5511999990001"),
    ("0055 11 3333-4444", "551133334444"),
    ("123", None),
    ("", None),
])
def test_normaliza_telefone(entrada, esperado):
    assert normalize_msisdn_br(entrada) == esperado


def test_email_generico_nao_conta():
    assert normalize_email(" Ana@Exemplo.COM ") == "ana@exemplo.com"
    assert normalize_email("sem-email@exemplo.com") == ""
    assert chaves_contato("sem-email@exemplo.com", "11999990001") == ["tel:5511999990001"]


def test_unificar_fica_o_de_maior_valor():
    registros = [
        {"nome": "Ana A", "email": "ana@exemplo.com", "valor": 50},
        {"nome": "Ana B", "email": "", "telefone": "11999990001", "valor": 30},
        {"nome": "Ana C", "email": "ANA@exemplo.com", "telefone": "11999990001", "valor": 90},
        {"nome": "Sem contato", "valor": 10},
        {"nome": "Sem contato 2", "valor": 20},
    ]
    nomes = [r["nome"] for r in unificar_contatos(registros)]
    assert nomes == ["Ana C", "Ana B", "Sem contato", "Sem contato 2"]


# ------------------------------------------------------------
# tratamento de erros da API
# ------------------------------------------------------------
def test_integridade_vira_409():
    resp = api_exception_handler(IntegrityError("UNIQUE constraint failed"), {})
    assert resp.status_code == 409
    assert resp.data["message"] == "Registro duplicado ou em conflito."

    resp = api_exception_handler(ProtectedError("protegido", set()), {})
    assert resp.status_code == 409


def test_regra_de_negocio_vira_400():
    resp = api_exception_handler(RegraDeNegocio("Mês inválido."), {})
    assert resp.status_code == 400
    assert resp.data == {"message": "Mês inválido.", "errors": ["Mês inválido."]}


def test_value_error_comum_nao_e_tratado():
    # sem resposta, o DRF deixa a exceção subir e o Django responde 500
    assert api_exception_handler(ValueError("invalid literal for int()"), {}) is None


@pytest.mark.parametrize("status_gateway, esperado", [(404, 400), (502, 500), (None, 500)])
def test_erro_do_gateway(status_gateway, esperado):
    resp = api_exception_handler(AsaasError("falhou", status_code=status_gateway, payload={"x": 1}), {})
    assert resp.status_code == esperado
    assert resp.data == {"message": "falhou", "error": {"x": 1}}


def test_excecao_desconhecida_nao_e_tratada():
    assert api_exception_handler(RuntimeError("boom"), {}) is None
