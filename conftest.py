# conftest.py
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import caches
from rest_framework.test import APIClient

from barbeiros.models import Barbeiro, Papel, Perfil
from servicos.models import Servico

User = get_user_model()


def _criar_usuario(email, papel, barbeiro=None):
    user = User.objects.create_user(username=email, email=email, password="senha-forte-123")
    Perfil.objects.create(user=user, papel=papel, barbeiro=barbeiro)
    return user


@pytest.fixture(autouse=True)
def _cache_asaas_limpo():
    caches["asaas"].clear()
    yield
    caches["asaas"].clear()


@pytest.fixture
def make_barbeiro(db):
    contador = {"n": 0}

    def _make(nome=None, **kwargs):
        contador["n"] += 1
        nome = nome or f"Barbeiro {contador['n']}"
        kwargs.setdefault("email", f"{nome.lower().replace(' ', '.')}@barbearia.test")
        return Barbeiro.objects.create(nome=nome, **kwargs)

    return _make


@pytest.fixture
def make_servico(db):
    def _make(nome, duracao_min=30, preco="40.00", **kwargs):
        return Servico.objects.create(nome=nome, duracao_min=duracao_min, preco=Decimal(preco), **kwargs)

    return _make


@pytest.fixture
def admin_user(db):
    return _criar_usuario("admin@barbearia.test", Papel.ADMIN)


@pytest.fixture
def recepcao_user(db):
    return _criar_usuario("recepcao@barbearia.test", Papel.RECEPCIONISTA)


@pytest.fixture
def api():
    return APIClient()


@pytest.fixture
def admin_api(admin_user):
    client = APIClient()
    client.force_authenticate(admin_user)
    return client


@pytest.fixture
def recepcao_api(recepcao_user):
    client = APIClient()
    client.force_authenticate(recepcao_user)
    return client


@pytest.fixture
def barbeiro_logado(make_barbeiro):
    """(client, barbeiro) autenticado com papel BARBEIRO."""
    barbeiro = make_barbeiro("Carlos")
    user = _criar_usuario("carlos@barbearia.test", Papel.BARBEIRO, barbeiro)
    client = APIClient()
    client.force_authenticate(user)
    return client, barbeiro
