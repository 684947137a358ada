# comissoes/distribuicao.py
"""
Divisão do faturamento entre barbeiros pelo tempo trabalhado.

    taxa(b)       = minutos(b) / total_minutos      (0 se o pool é 0)
    faturamento(b) = taxa(b) * faturamento_total
    comissao(b)   = faturamento(b) * percentual / 100

Valores monetários em Decimal sem arredondar; quantize só na saída.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from core.erros import RegraDeNegocio

CENTAVO = Decimal("0.01")
ZERO = Decimal("0")


def quantizar(valor: Decimal) -> Decimal:
    return Decimal(valor).quantize(CENTAVO, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Lancamento:
    barbeiro_id: int
    servico_id: int
    quantidade: int
    duracao_min: int

    @property
    def minutos(self) -> int:
        return self.quantidade * self.duracao_min


@dataclass
class ItemDistribuido:
    barbeiro_id: int
    servico_id: int
    quantidade: int = 0
    minutos: int = 0
    faturamento_proporcional: Decimal = ZERO
    comissao: Decimal = ZERO


@dataclass
class ParticipacaoBarbeiro:
    barbeiro_id: int
    minutos_trabalhados: int = 0
    quantidade: int = 0
    taxa: Decimal = ZERO
    faturamento_proporcional: Decimal = ZERO
    comissao: Decimal = ZERO
    itens: list[ItemDistribuido] = field(default_factory=list)

    @property
    def percentual_participacao(self) -> Decimal:
        return self.taxa * 100


@dataclass
class ResultadoDistribuicao:
    faturamento_total: Decimal
    percentual_comissao: Decimal
    total_minutos: int
    participacoes: list[ParticipacaoBarbeiro]

    @property
    def pool_comissao(self) -> Decimal:
        return self.faturamento_total * self.percentual_comissao / 100

    @property
    def total_comissao(self) -> Decimal:
        return sum((p.comissao for p in self.participacoes), ZERO)

    @property
    def total_distribuido(self) -> Decimal:
        return sum((p.faturamento_proporcional for p in self.participacoes), ZERO)

    def por_barbeiro(self) -> dict[int, ParticipacaoBarbeiro]:
        return {p.barbeiro_id: p for p in self.participacoes}


def taxa_participacao(minutos: int, total_minutos: int) -> Decimal:
    if total_minutos <= 0:
        return ZERO
    return Decimal(minutos) / Decimal(total_minutos)


def calcular_distribuicao(
    lancamentos: Iterable[Lancamento],
    faturamento_total,
    percentual_comissao=40,
    barbeiros: Optional[Sequence[int]] = None,
) -> ResultadoDistribuicao:
    """
    Agrega os lançamentos por barbeiro e por (barbeiro, serviço) e reparte
    `faturamento_total` pela taxa de minutos.

    `barbeiros` lista ids que devem aparecer mesmo sem lançamentos (ficam
    com tudo zerado). A ordem de saída é a de `barbeiros` seguida dos ids
    na ordem em que aparecem nos lançamentos.
    """
    faturamento_total = Decimal(str(faturamento_total))
    percentual = Decimal(str(percentual_comissao))
    if faturamento_total < 0:
        raise RegraDeNegocio("O faturamento total não pode ser negativo.")
    if not 0 <= percentual <= 100:
        raise RegraDeNegocio("O percentual de comissão deve estar entre 0 e 100.")

    participacoes: dict[int, ParticipacaoBarbeiro] = {}
    for bid in barbeiros or ():
        participacoes.setdefault(bid, ParticipacaoBarbeiro(barbeiro_id=bid))

    itens: dict[tuple[int, int], ItemDistribuido] = {}
    for lanc in lancamentos:
        if lanc.quantidade < 0:
            raise RegraDeNegocio("A quantidade não pode ser negativa.")
        p = participacoes.setdefault(lanc.barbeiro_id, ParticipacaoBarbeiro(barbeiro_id=lanc.barbeiro_id))
        p.minutos_trabalhados += lanc.minutos
        p.quantidade += lanc.quantidade

        chave = (lanc.barbeiro_id, lanc.servico_id)
        item = itens.get(chave)
        if item is None:
            item = itens[chave] = ItemDistribuido(barbeiro_id=lanc.barbeiro_id, servico_id=lanc.servico_id)
            p.itens.append(item)
        item.quantidade += lanc.quantidade
        item.minutos += lanc.minutos

    total_minutos = sum(p.minutos_trabalhados for p in participacoes.values())

    for p in participacoes.values():
        p.taxa = taxa_participacao(p.minutos_trabalhados, total_minutos)
        p.faturamento_proporcional = p.taxa * faturamento_total
        p.comissao = p.faturamento_proporcional * percentual / 100
        for item in p.itens:
            taxa_item = taxa_participacao(item.minutos, total_minutos)
            item.faturamento_proporcional = taxa_item * faturamento_total
            item.comissao = item.faturamento_proporcional * percentual / 100

    return ResultadoDistribuicao(
        faturamento_total=faturamento_total,
        percentual_comissao=percentual,
        total_minutos=total_minutos,
        participacoes=list(participacoes.values()),
    )
