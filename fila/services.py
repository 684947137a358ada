# fila/services.py
"""
Operações da Lista da Vez. Toda mutação roda numa transação; os
contadores são incrementados com F() sobre a linha do dia travada.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from django.db import transaction
from django.db.models import F, Max, Sum
from django.utils import timezone

from barbeiros.models import Barbeiro
from core.erros import RegraDeNegocio
from core.periodos import mes_de
from .models import AtendimentoDiario, OrdemFila
from .ordenacao import PosicaoFila, ordenar_fila, proximo_da_vez

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Leitura
# ------------------------------------------------------------
def proxima_posicao() -> int:
    return (OrdemFila.objects.aggregate(m=Max("posicao"))["m"] or 0) + 1


def barbeiros_em_ordem() -> list[Barbeiro]:
    """Ordem de entrada da fila: posição da OrdemFila, depois ordem de cadastro."""
    barbeiros = list(Barbeiro.objects.select_related("ordem_fila").order_by("criado_em", "id"))

    def chave(par):
        idx, b = par
        ordem = getattr(b, "ordem_fila", None)
        return (0, ordem.posicao, idx) if ordem else (1, 0, idx)

    return [b for _, b in sorted(enumerate(barbeiros), key=chave)]


def na_rotacao(barbeiro: Barbeiro) -> bool:
    ordem = getattr(barbeiro, "ordem_fila", None)
    return barbeiro.ativo and (ordem.ativo if ordem else True)


def entradas_do_mes(mes: str) -> list[PosicaoFila]:
    totais = {
        r["barbeiro_id"]: r
        for r in (
            AtendimentoDiario.objects
            .filter(mes=mes)
            .values("barbeiro_id")
            .annotate(total=Sum("atendimentos_diarios"), passou=Sum("vezes_passou"))
            .order_by()
        )
    }
    entradas = []
    for b in barbeiros_em_ordem():
        t = totais.get(b.pk, {})
        entradas.append(PosicaoFila(
            barbeiro_id=b.pk,
            nome=b.nome,
            total_atendimentos_mes=t.get("total") or 0,
            vezes_passou_mes=t.get("passou") or 0,
            ativo=na_rotacao(b),
        ))
    return entradas


def fila_do_mes(mes: str) -> dict:
    entradas = entradas_do_mes(mes)
    fila = ordenar_fila(entradas)
    return {
        "mes": mes,
        "fila": fila,
        "inativos": [e for e in entradas if not e.ativo],
        "proximo": fila[0] if fila else None,
    }


def proximo(mes: Optional[str] = None) -> Optional[PosicaoFila]:
    return proximo_da_vez(entradas_do_mes(mes or mes_de(timezone.localdate())))


def posicao_do_barbeiro(barbeiro_id: int, mes: str) -> dict:
    entradas = entradas_do_mes(mes)
    fila = ordenar_fila(entradas)
    propria = next((e for e in fila if e.barbeiro_id == barbeiro_id), None)
    if propria is None:
        propria = next(e for e in entradas if e.barbeiro_id == barbeiro_id)
    return {
        "mes": mes,
        "barbeiro_id": barbeiro_id,
        "posicao": propria.posicao,
        "total_na_fila": len(fila),
        "a_frente": (propria.posicao - 1) if propria.posicao else None,
        "total_atendimentos_mes": propria.total_atendimentos_mes,
        "vezes_passou_mes": propria.vezes_passou_mes,
        "ativo": propria.ativo,
    }


def atendimentos_do_dia(data: date):
    return AtendimentoDiario.objects.filter(data=data).select_related("barbeiro").order_by("barbeiro__nome")


# ------------------------------------------------------------
# Mutações
# ------------------------------------------------------------
def _incrementar(barbeiro_id: int, data: date, atendimentos: int = 0, passou: int = 0) -> AtendimentoDiario:
    mes = mes_de(data)
    linha, _ = AtendimentoDiario.objects.select_for_update().get_or_create(
        barbeiro_id=barbeiro_id, data=data, mes=mes,
    )
    AtendimentoDiario.objects.filter(pk=linha.pk).update(
        atendimentos_diarios=F("atendimentos_diarios") + atendimentos,
        vezes_passou=F("vezes_passou") + passou,
        updated_at=timezone.now(),
    )
    linha.refresh_from_db()
    return linha


def _travar_fila():
    """Trava as entradas da OrdemFila; serializa mutações concorrentes da fila."""
    list(OrdemFila.objects.select_for_update().values_list("pk", flat=True))


def _exigir_na_rotacao(barbeiro_id: int) -> Barbeiro:
    barbeiro = Barbeiro.objects.select_related("ordem_fila").get(pk=barbeiro_id)
    if not na_rotacao(barbeiro):
        raise RegraDeNegocio(f"O barbeiro {barbeiro.nome} está fora da fila.")
    return barbeiro


@transaction.atomic
def adicionar_atendimento(barbeiro_id: Optional[int] = None, data: Optional[date] = None) -> AtendimentoDiario:
    """
    Sem barbeiro: o primeiro da fila do mês recebe o cliente.
    Com barbeiro: atribuição manual, independente da posição.
    """
    data = data or timezone.localdate()
    _travar_fila()

    if barbeiro_id is None:
        prox = proximo_da_vez(entradas_do_mes(mes_de(data)))
        if prox is None:
            raise RegraDeNegocio("Nenhum barbeiro ativo na fila.")
        barbeiro_id = prox.barbeiro_id
    else:
        _exigir_na_rotacao(barbeiro_id)

    linha = _incrementar(barbeiro_id, data, atendimentos=1)
    logger.info("[fila] atendimento para barbeiro %s em %s (total do dia=%s)",
                barbeiro_id, data, linha.atendimentos_diarios)
    return linha


@transaction.atomic
def passar_vez(barbeiro_id: int, data: Optional[date] = None) -> AtendimentoDiario:
    """Conta como atendimento e registra que o barbeiro passou a vez."""
    data = data or timezone.localdate()
    _travar_fila()
    _exigir_na_rotacao(barbeiro_id)
    linha = _incrementar(barbeiro_id, data, atendimentos=1, passou=1)
    logger.info("[fila] barbeiro %s passou a vez em %s", barbeiro_id, data)
    return linha


@transaction.atomic
def zerar_mes(mes: str) -> int:
    """Zera os contadores do mês mantendo as linhas; não mexe em ativo nem no livro."""
    n = AtendimentoDiario.objects.filter(mes=mes).update(
        atendimentos_diarios=0, vezes_passou=0, updated_at=timezone.now(),
    )
    logger.info("[fila] mês %s zerado (%s linhas)", mes, n)
    return n


@transaction.atomic
def criar_dia(barbeiro: Barbeiro, data: date, atendimentos_diarios: int = 0, vezes_passou: int = 0) -> AtendimentoDiario:
    """Cria a linha do dia; se já existir, a constraint única levanta IntegrityError."""
    return AtendimentoDiario.objects.create(
        barbeiro=barbeiro,
        data=data,
        atendimentos_diarios=atendimentos_diarios,
        vezes_passou=vezes_passou,
    )


@transaction.atomic
def salvar_dia(data: date, atendimentos: Iterable[dict]) -> list[AtendimentoDiario]:
    """Upsert do dia inteiro lançado pela recepção."""
    mes = mes_de(data)
    linhas = []
    for item in atendimentos:
        linha, _ = AtendimentoDiario.objects.update_or_create(
            barbeiro_id=item["barbeiro_id"],
            data=data,
            mes=mes,
            defaults={
                "atendimentos_diarios": item.get("atendimentos_diarios", 0),
                "vezes_passou": item.get("vezes_passou", 0),
            },
        )
        linhas.append(linha)
    logger.info("[fila] dia %s salvo (%s barbeiros)", data, len(linhas))
    return linhas


# ------------------------------------------------------------
# Ordem da fila
# ------------------------------------------------------------
@transaction.atomic
def inicializar_ordem() -> int:
    """Cria as entradas que faltam, no fim da fila, em ordem de cadastro."""
    proxima = proxima_posicao()
    criadas = 0
    for b in Barbeiro.objects.filter(ordem_fila__isnull=True).order_by("criado_em", "id"):
        OrdemFila.objects.create(barbeiro=b, posicao=proxima)
        proxima += 1
        criadas += 1
    logger.info("[fila] ordem inicializada (%s novas entradas)", criadas)
    return criadas


@transaction.atomic
def reordenar(ids: Sequence[int]) -> list[OrdemFila]:
    """Os ids informados ocupam as primeiras posições; os demais seguem na ordem atual."""
    if len(set(ids)) != len(ids):
        raise RegraDeNegocio("A ordem contém barbeiros repetidos.")
    existentes = set(Barbeiro.objects.filter(pk__in=ids).values_list("pk", flat=True))
    faltando = [i for i in ids if i not in existentes]
    if faltando:
        raise RegraDeNegocio(f"Barbeiros não encontrados: {faltando}")

    for pos, bid in enumerate(ids, start=1):
        OrdemFila.objects.update_or_create(barbeiro_id=bid, defaults={"posicao": pos})

    restantes = OrdemFila.objects.exclude(barbeiro_id__in=ids).order_by("posicao", "id")
    for pos, ordem in enumerate(restantes, start=len(ids) + 1):
        if ordem.posicao != pos:
            ordem.posicao = pos
            ordem.save(update_fields=["posicao", "updated_at"])

    logger.info("[fila] fila reordenada: %s", list(ids))
    return list(OrdemFila.objects.select_related("barbeiro"))


@transaction.atomic
def alternar_ativo(barbeiro: Barbeiro) -> OrdemFila:
    """Liga/desliga o barbeiro na rotação; os contadores ficam como estão."""
    ordem, _ = OrdemFila.objects.select_for_update().get_or_create(
        barbeiro=barbeiro, defaults={"posicao": proxima_posicao()},
    )
    ordem.ativo = not ordem.ativo
    ordem.save(update_fields=["ativo", "updated_at"])
    logger.info("[fila] barbeiro %s %s", barbeiro.pk, "voltou para a fila" if ordem.ativo else "saiu da fila")
    return ordem
