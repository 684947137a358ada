# assinaturas/asaas.py
"""
Cliente HTTP mínimo da API v3 do Asaas.

Operações consumidas: clientes (listar/buscar/criar), assinaturas
(listar/criar) e cobranças (listar). Sem retry: falhas sobem como
AsaasError com o payload devolvido pelo gateway.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

PAGE_SIZE = 100
MAX_PAGINAS = 50


class AsaasError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class AsaasClient:
    def __init__(
        self,
        api_key: str,
        *,
        conta: str = "",
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.conta = conta
        self.base_url = (base_url or settings.ASAAS_API_URL).rstrip("/")
        self.timeout = timeout or settings.ASAAS_TIMEOUT
        self.session = session or requests.Session()

    def __repr__(self):
        # nunca expor a chave
        return f"<AsaasClient conta={self.conta!r}>"

    # ---------- transporte ----------
    def _request(self, method: str, path: str, *, params: Optional[Mapping] = None, json: Any = None):
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = {"access_token": self.api_key, "Content-Type": "application/json"}
        try:
            resp = self.session.request(method, url, params=params, json=json, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("[asaas] %s %s falhou (conta=%s): %s", method, path, self.conta, e)
            raise AsaasError("Falha de comunicação com o Asaas.", payload={"detail": str(e)}) from e

        try:
            data = resp.json()
        except ValueError:
            data = {"raw": (resp.text or "")[:500]}

        if not resp.ok:
            logger.warning("[asaas] %s %s -> %s (conta=%s)", method, path, resp.status_code, self.conta)
            raise AsaasError(f"Asaas respondeu {resp.status_code}.", status_code=resp.status_code, payload=data)
        return data

    def _listar(self, path: str, params: Optional[Mapping] = None) -> list[dict]:
        """Percorre a paginação offset/limit até hasMore=false."""
        base = {k: v for k, v in (params or {}).items() if v not in (None, "")}
        out: list[dict] = []
        offset = 0
        for _ in range(MAX_PAGINAS):
            data = self._request("GET", path, params={**base, "offset": offset, "limit": PAGE_SIZE})
            out.extend(data.get("data") or [])
            if not data.get("hasMore"):
                break
            offset += PAGE_SIZE
        return out

    # ---------- clientes ----------
    def listar_clientes(self) -> list[dict]:
        return self._listar("customers")

    def buscar_cliente(self, customer_id: str) -> dict:
        return self._request("GET", f"customers/{customer_id}")

    def criar_cliente(self, dados: Mapping[str, Any]) -> dict:
        payload = {k: v for k, v in dados.items() if v not in (None, "")}
        return self._request("POST", "customers", json=payload)

    # ---------- assinaturas ----------
    def listar_assinaturas(self, status: Optional[str] = None, customer: Optional[str] = None) -> list[dict]:
        return self._listar("subscriptions", {"status": status, "customer": customer})

    def criar_assinatura(self, dados: Mapping[str, Any]) -> dict:
        payload = {k: v for k, v in dados.items() if v not in (None, "")}
        return self._request("POST", "subscriptions", json=payload)

    # ---------- cobranças ----------
    def listar_pagamentos(self, status: Optional[str] = None, customer: Optional[str] = None) -> list[dict]:
        return self._listar("payments", {"status": status, "customer": customer})


def clientes_configurados() -> dict[str, AsaasClient]:
    """Um AsaasClient por conta com chave configurada (settings.ASAAS_ACCOUNTS)."""
    return {
        conta: AsaasClient(chave, conta=conta)
        for conta, chave in settings.ASAAS_ACCOUNTS.items()
        if chave
    }


def cliente_da_conta(conta: Optional[str] = None) -> AsaasClient:
    conta = conta or settings.ASAAS_CONTA_PADRAO
    chave = settings.ASAAS_ACCOUNTS.get(conta)
    if not chave:
        raise AsaasError(f"Chave API do Asaas não configurada para a conta {conta}.")
    return AsaasClient(chave, conta=conta)
