# assinaturas/sincronizacao.py
"""
Leitura das contas Asaas com cache read-through.

O cache é injetado (alias 'asaas' do framework de cache do Django em
produção; qualquer objeto com get/set/clear nos testes). Se o gateway
falhar numa leitura forçada, devolve o último valor bom ainda em cache.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Mapping, Optional

from django.conf import settings
from django.core.cache import caches

from .asaas import AsaasClient, AsaasError, clientes_configurados

logger = logging.getLogger(__name__)


class SincronizadorAsaas:
    def __init__(self, clientes: Mapping[str, AsaasClient], cache, ttl: Optional[int] = None):
        self.clientes = dict(clientes)
        self.cache = cache
        self.ttl = ttl if ttl is not None else settings.ASAAS_CACHE_TTL

    @property
    def contas(self) -> list[str]:
        return list(self.clientes)

    # ---------- cache ----------
    def _ler(self, chave: str, buscar: Callable[[], object], forcar: bool = False):
        chave = f"asaas:{chave}"
        em_cache = self.cache.get(chave)
        if em_cache is not None and not forcar:
            return em_cache
        try:
            valor = buscar()
        except AsaasError:
            if em_cache is not None:
                logger.warning("[asaas] usando cache para %s após falha no gateway", chave)
                return em_cache
            raise
        self.cache.set(chave, valor, self.ttl)
        return valor

    def limpar(self):
        self.cache.clear()
        logger.info("[asaas] cache limpo")

    # ---------- leitura por conta ----------
    def clientes_da_conta(self, conta: str, forcar: bool = False) -> list[dict]:
        api = self.clientes[conta]
        return self._ler(f"{conta}:clientes", api.listar_clientes, forcar)

    def assinaturas_da_conta(self, conta: str, status: Optional[str] = None, forcar: bool = False) -> list[dict]:
        api = self.clientes[conta]
        return self._ler(
            f"{conta}:assinaturas:{status or 'todas'}",
            lambda: api.listar_assinaturas(status=status),
            forcar,
        )

    def pagamentos_da_conta(self, conta: str, status: Optional[str] = None, forcar: bool = False) -> list[dict]:
        api = self.clientes[conta]
        return self._ler(
            f"{conta}:pagamentos:{status or 'todos'}",
            lambda: api.listar_pagamentos(status=status),
            forcar,
        )

    def cobrancas_por_cliente(self, conta: str, forcar: bool = False) -> dict[str, list[dict]]:
        agrupado: dict[str, list[dict]] = defaultdict(list)
        for p in self.pagamentos_da_conta(conta, forcar=forcar):
            if p.get("customer"):
                agrupado[p["customer"]].append(p)
        return dict(agrupado)

    # ---------- leitura agregada ----------
    def agregar(self, ler: Callable[[str], list[dict]]) -> tuple[list[dict], list[dict]]:
        """
        Junta o resultado de todas as contas marcando a origem em 'conta'.
        Falha de uma conta vira item em `falhas`; só levanta se todas falharem.
        """
        if not self.clientes:
            raise AsaasError("Nenhuma conta Asaas configurada.")

        itens: list[dict] = []
        falhas: list[dict] = []
        ultimo_erro: Optional[AsaasError] = None
        for conta in self.clientes:
            try:
                dados = ler(conta)
            except AsaasError as e:
                logger.error("[asaas] leitura falhou na conta %s: %s", conta, e)
                falhas.append({"conta": conta, "message": str(e), "status_code": e.status_code})
                ultimo_erro = e
                continue
            itens.extend({**d, "conta": conta} for d in dados)

        if ultimo_erro is not None and len(falhas) == len(self.clientes):
            raise ultimo_erro
        return itens, falhas

    def listar_clientes(self, forcar: bool = False):
        return self.agregar(lambda conta: self.clientes_da_conta(conta, forcar))

    def listar_assinaturas(self, status: Optional[str] = None, forcar: bool = False):
        return self.agregar(lambda conta: self.assinaturas_da_conta(conta, status, forcar))

    def listar_pagamentos(self, status: Optional[str] = None, forcar: bool = False):
        return self.agregar(lambda conta: self.pagamentos_da_conta(conta, status, forcar))


def get_sincronizador() -> SincronizadorAsaas:
    return SincronizadorAsaas(clientes_configurados(), caches["asaas"])
