# barbeiros/tests.py
import pytest
from django.contrib.auth import get_user_model

from barbeiros.models import Barbeiro, Papel
from fila.models import OrdemFila

User = get_user_model()


def test_login_e_me(api, recepcao_user):
    resp = api.post("/api/auth/login/", {"email": "RECEPCAO@barbearia.test", "password": "senha-forte-123"}, format="json")
    assert resp.status_code == 200
    assert resp.data["user"]["papel"] == Papel.RECEPCIONISTA

    me = api.get("/api/auth/me/")
    assert me.data["email"] == "recepcao@barbearia.test"

    api.post("/api/auth/logout/")
    assert api.get("/api/auth/me/").status_code == 403


def test_login_recusado(api, recepcao_user):
    resp = api.post("/api/auth/login/", {"email": "recepcao@barbearia.test", "password": "errada"}, format="json")
    assert resp.status_code == 401
    assert resp.data["message"] == "Email ou senha inválidos."


def test_usuario_barbeiro_precisa_de_barbeiro(admin_api, make_barbeiro):
    resp = admin_api.post("/api/usuarios/", {"email": "novo@barbearia.test", "password": "segredo1"}, format="json")
    assert resp.status_code == 400
    assert "barbeiro_id" in resp.data["errors"]

    ana = make_barbeiro("Ana")
    resp = admin_api.post("/api/usuarios/", {
        "email": "Novo@barbearia.test", "password": "segredo1", "barbeiro_id": ana.pk,
    }, format="json")
    assert resp.status_code == 201
    assert resp.data["barbeiro_id"] == ana.pk
    assert User.objects.get(username="novo@barbearia.test").perfil.papel == Papel.BARBEIRO


def test_usuario_so_admin_cria(recepcao_api):
    resp = recepcao_api.post("/api/usuarios/", {"email": "x@barbearia.test", "password": "segredo1",
                                                "papel": Papel.ADMIN}, format="json")
    assert resp.status_code == 403


def test_barbeiros_crud(admin_api, barbeiro_logado):
    resp = admin_api.post("/api/barbeiros/", {"nome": " Ana ", "email": "ANA@barbearia.test"}, format="json")
    assert resp.status_code == 201
    assert (resp.data["nome"], resp.data["email"], resp.data["percentual_comissao"]) == ("Ana", "ana@barbearia.test", 40)

    # todo barbeiro novo entra na fila
    assert OrdemFila.objects.filter(barbeiro_id=resp.data["id"]).exists()

    client, _ = barbeiro_logado
    assert client.get("/api/barbeiros/").status_code == 200
    assert client.post("/api/barbeiros/", {"nome": "X", "email": "x@barbearia.test"}, format="json").status_code == 403


def test_email_duplicado(admin_api, make_barbeiro):
    make_barbeiro("Ana", email="ana@barbearia.test")
    resp = admin_api.post("/api/barbeiros/", {"nome": "Ana 2", "email": "ana@barbearia.test"}, format="json")
    assert resp.status_code == 400


def test_toggle_ativo_e_filtro(admin_api, make_barbeiro):
    ana = make_barbeiro("Ana")
    make_barbeiro("Bruno")
    resp = admin_api.post(f"/api/barbeiros/{ana.pk}/toggle-ativo/")
    assert resp.data["ativo"] is False
    assert [b["nome"] for b in admin_api.get("/api/barbeiros/?ativos=1").data] == ["Bruno"]


def test_trocar_senha(barbeiro_logado):
    client, _ = barbeiro_logado
    resp = client.post("/api/auth/change-password/", {"senha_atual": "errada", "nova_senha": "Outra-senha-456"}, format="json")
    assert resp.status_code == 400

    resp = client.post("/api/auth/change-password/", {
        "senha_atual": "senha-forte-123", "nova_senha": "Outra-senha-456",
    }, format="json")
    assert resp.status_code == 200
    assert User.objects.get(username="carlos@barbearia.test").check_password("Outra-senha-456")


def test_anonimo_nao_acessa(api, db):
    assert api.get("/api/barbeiros/").status_code == 403
