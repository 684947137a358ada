# clientes/services.py
"""
Regras de clientes: cadastro manual (upsert por contato), importação em
lote, visão unificada local + Asaas e sincronização das contas Asaas
para a tabela local.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from assinaturas.sincronizacao import SincronizadorAsaas
from assinaturas.status import INADIMPLENTE, status_por_cobrancas, vencimento_por_cobrancas
from core.contacts import localizar_cliente, normalize_email, normalize_phone, unificar_contatos
from core.periodos import limites_do_mes
from .models import Cliente, Origem, StatusAssinatura
from .serializers import ClienteManualSerializer

logger = logging.getLogger(__name__)

CONTA_EXTERNA = "PAGAMENTO_EXTERNO"


# ------------------------------------------------------------
# Cadastro manual / lote
# ------------------------------------------------------------
@transaction.atomic
def cadastro_manual(dados: dict) -> tuple[Cliente, bool]:
    """
    Upsert de cliente EXTERNO a partir de dados já validados.
    Reaproveita o cadastro existente com mesmo email/telefone.
    """
    cliente = localizar_cliente(dados.get("email"), dados.get("telefone"))
    criado = cliente is None
    if criado:
        cliente = Cliente()

    for campo, valor in dados.items():
        if campo in ("email", "telefone", "cpf") and not valor:
            continue  # não apaga contato já conhecido
        setattr(cliente, campo, valor)
    cliente.save()

    logger.info("[clientes] cadastro manual %s id=%s", "criado" if criado else "atualizado", cliente.pk)
    return cliente, criado


def importar_lote(linhas: Iterable[dict]) -> dict:
    """
    Importa várias linhas independentes; cada linha válida é gravada na
    própria transação e as inválidas voltam com os erros do serializer.
    """
    criados = atualizados = 0
    erros = []
    linhas = list(linhas)

    for i, linha in enumerate(linhas, start=1):
        ser = ClienteManualSerializer(data=linha)
        if not ser.is_valid():
            erros.append({"linha": i, "erros": ser.errors})
            continue
        _, criado = cadastro_manual(dict(ser.validated_data))
        if criado:
            criados += 1
        else:
            atualizados += 1

    logger.info("[clientes] lote: %s linhas, %s novos, %s atualizados, %s erros",
                len(linhas), criados, atualizados, len(erros))
    return {
        "total": len(linhas),
        "importados": criados,
        "atualizados": atualizados,
        "erros": erros,
    }


# ------------------------------------------------------------
# Consultas de vencimento / estatísticas
# ------------------------------------------------------------
def _hoje(hoje: Optional[date]) -> date:
    return hoje or timezone.localdate()


def vencendo(dias: Optional[int] = None, hoje: Optional[date] = None):
    """Ativos que vencem entre hoje e hoje + dias."""
    hoje = _hoje(hoje)
    dias = settings.CLIENTE_VENCENDO_DIAS if dias is None else dias
    return (
        Cliente.objects
        .filter(
            status_assinatura=StatusAssinatura.ATIVO,
            data_vencimento_assinatura__gte=hoje,
            data_vencimento_assinatura__lte=hoje + timedelta(days=dias),
        )
        .order_by("data_vencimento_assinatura", "nome")
    )


def vencidos(hoje: Optional[date] = None):
    hoje = _hoje(hoje)
    return (
        Cliente.objects
        .filter(data_vencimento_assinatura__lt=hoje)
        .exclude(status_assinatura=StatusAssinatura.INATIVO)
        .order_by("data_vencimento_assinatura", "nome")
    )


def estatisticas(hoje: Optional[date] = None) -> dict:
    hoje = _hoje(hoje)
    agg = Cliente.objects.aggregate(
        total=Count("id"),
        ativos=Count("id", filter=Q(status_assinatura=StatusAssinatura.ATIVO)),
        inativos=Count("id", filter=Q(status_assinatura=StatusAssinatura.INATIVO)),
        inadimplentes=Count("id", filter=Q(status_assinatura=StatusAssinatura.INADIMPLENTE)),
        receita_mensal=Sum("plano_valor", filter=Q(status_assinatura=StatusAssinatura.ATIVO)),
    )
    por_origem = {o: 0 for o in Origem.values}
    for row in Cliente.objects.values("origem").annotate(n=Count("id")):
        por_origem[row["origem"]] = row["n"]

    return {
        **agg,
        "receita_mensal": agg["receita_mensal"] or Decimal("0.00"),
        "por_origem": por_origem,
        "vencendo": vencendo(hoje=hoje).count(),
        "vencidos": vencidos(hoje=hoje).count(),
    }


def receita_assinaturas_do_mes(mes: str) -> Decimal:
    """Soma de plano_valor dos ATIVOS cuja assinatura começou no mês."""
    first, nxt = limites_do_mes(mes)
    total = Cliente.objects.filter(
        status_assinatura=StatusAssinatura.ATIVO,
        data_inicio_assinatura__gte=first,
        data_inicio_assinatura__lt=nxt,
    ).aggregate(s=Sum("plano_valor"))["s"]
    return total or Decimal("0.00")


# ------------------------------------------------------------
# Asaas -> registros
# ------------------------------------------------------------
def _data_iso(valor) -> Optional[date]:
    if not valor:
        return None
    try:
        return datetime.strptime(str(valor)[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def _registros_da_conta(sinc: SincronizadorAsaas, conta: str, hoje: date, forcar: bool = False) -> list[dict]:
    """Um registro por customer da conta, já com plano e status calculados."""
    customers = sinc.clientes_da_conta(conta, forcar=forcar)
    assinaturas = [
        a for a in sinc.assinaturas_da_conta(conta, forcar=forcar)
        if a.get("status") == "ACTIVE"
    ]
    cobrancas = sinc.cobrancas_por_cliente(conta, forcar=forcar)

    # assinatura de maior valor por customer
    por_customer: dict[str, dict] = {}
    for a in assinaturas:
        atual = por_customer.get(a.get("customer"))
        if atual is None or float(a.get("value") or 0) > float(atual.get("value") or 0):
            por_customer[a.get("customer")] = a

    registros = []
    for c in customers:
        if c.get("deleted"):
            continue
        assinatura = por_customer.get(c["id"])
        cob = cobrancas.get(c["id"], [])
        registros.append({
            "id": c["id"],
            "nome": c.get("name") or "",
            "email": c.get("email") or "",
            "telefone": c.get("mobilePhone") or c.get("phone") or "",
            "cpf": c.get("cpfCnpj") or "",
            "valor": float(assinatura.get("value") or 0) if assinatura else 0.0,
            "plano": (assinatura or {}).get("description") or "",
            "forma_pagamento": (assinatura or {}).get("billingType") or "",
            "tem_assinatura": assinatura is not None,
            "status": status_por_cobrancas(cob, hoje),
            "data_inicio": _data_iso((assinatura or {}).get("dateCreated")),
            "data_vencimento": (
                vencimento_por_cobrancas(cob)
                or _data_iso((assinatura or {}).get("nextDueDate"))
            ),
        })
    return registros


def _registros_externos() -> list[dict]:
    qs = Cliente.objects.filter(origem=Origem.EXTERNO, status_assinatura=StatusAssinatura.ATIVO)
    return [
        {
            "id": c.pk,
            "nome": c.nome,
            "email": c.email,
            "telefone": c.telefone,
            "cpf": c.cpf,
            "valor": float(c.plano_valor),
            "plano": c.plano_nome,
            "forma_pagamento": c.forma_pagamento,
            "tem_assinatura": True,
            "status": "ativo",
            "data_inicio": c.data_inicio_assinatura,
            "data_vencimento": c.data_vencimento_assinatura,
            "conta": CONTA_EXTERNA,
        }
        for c in qs
    ]


def clientes_unificados(sinc: SincronizadorAsaas, hoje: Optional[date] = None) -> dict:
    """
    Externos locais + customers das contas Asaas, deduplicados por
    email/telefone (fica o de maior valor) e separados em ativos e
    inadimplentes.
    """
    hoje = _hoje(hoje)
    asaas, falhas = [], []
    if sinc.contas:
        asaas, falhas = sinc.agregar(lambda conta: _registros_da_conta(sinc, conta, hoje))

    unicos = unificar_contatos([*asaas, *_registros_externos()], valor_key="valor")
    ativos = [r for r in unicos if r["status"] != INADIMPLENTE]
    inadimplentes = [r for r in unicos if r["status"] == INADIMPLENTE]

    return {
        "total": len(unicos),
        "ativos": {"total": len(ativos), "clientes": ativos},
        "inadimplentes": {"total": len(inadimplentes), "clientes": inadimplentes},
        "falhas": falhas,
    }


# ------------------------------------------------------------
# Sincronização Asaas -> tabela local
# ------------------------------------------------------------
def _status_local(reg: dict) -> str:
    if not reg["tem_assinatura"]:
        return StatusAssinatura.INATIVO
    if reg["status"] == INADIMPLENTE:
        return StatusAssinatura.INADIMPLENTE
    return StatusAssinatura.ATIVO


def _upsert_asaas(reg: dict) -> bool:
    """Grava um registro de conta Asaas. Retorna True se criou."""
    conta = reg["conta"]
    cliente = Cliente.objects.filter(origem=conta, asaas_customer_id=reg["id"]).first()
    if cliente is None:
        achado = localizar_cliente(reg["email"], reg["telefone"])
        # cadastro de outra conta Asaas não é sobrescrito
        if achado is not None and not achado.asaas_customer_id:
            cliente = achado
    criado = cliente is None
    if criado:
        cliente = Cliente()

    cliente.nome = reg["nome"] or cliente.nome
    cliente.email = normalize_email(reg["email"]) or cliente.email
    cliente.telefone = normalize_phone(reg["telefone"]) or cliente.telefone
    cliente.cpf = reg["cpf"] or cliente.cpf
    cliente.origem = conta
    cliente.asaas_customer_id = reg["id"]
    cliente.status_assinatura = _status_local(reg)
    if reg["tem_assinatura"]:
        cliente.plano_nome = reg["plano"] or cliente.plano_nome
        cliente.plano_valor = Decimal(str(reg["valor"]))
        cliente.forma_pagamento = reg["forma_pagamento"]
        cliente.data_inicio_assinatura = reg["data_inicio"] or cliente.data_inicio_assinatura
        cliente.data_vencimento_assinatura = reg["data_vencimento"] or cliente.data_vencimento_assinatura
    cliente.save()
    return criado


def sincronizar_com_asaas(sinc: SincronizadorAsaas, hoje: Optional[date] = None) -> dict:
    """Relê as contas ignorando o cache e atualiza os clientes locais."""
    hoje = _hoje(hoje)
    registros, falhas = sinc.agregar(lambda conta: _registros_da_conta(sinc, conta, hoje, forcar=True))

    criados = atualizados = 0
    with transaction.atomic():
        for reg in registros:
            if _upsert_asaas(reg):
                criados += 1
            else:
                atualizados += 1

    logger.info("[clientes] sincronização Asaas: %s criados, %s atualizados, %s contas com falha",
                criados, atualizados, len(falhas))
    return {
        "total": len(registros),
        "criados": criados,
        "atualizados": atualizados,
        "falhas": falhas,
    }
