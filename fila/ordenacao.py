# fila/ordenacao.py
"""
Lista da Vez: quem tem menos atendimentos no mês atende primeiro.

Empates mantêm a ordem de entrada (posição definida na OrdemFila e,
depois dela, ordem de cadastro). O índice de entrada faz parte da
chave de ordenação, então o desempate não depende da estabilidade do
algoritmo.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional


@dataclass(frozen=True)
class PosicaoFila:
    barbeiro_id: int
    nome: str = ""
    total_atendimentos_mes: int = 0
    vezes_passou_mes: int = 0
    ativo: bool = True
    posicao: Optional[int] = None


def ordenar_fila(entradas: Iterable[PosicaoFila]) -> list[PosicaoFila]:
    """Só ativos, do menor total para o maior, com `posicao` 1..n preenchida."""
    ativos = [e for e in entradas if e.ativo]
    ordenados = sorted(enumerate(ativos), key=lambda par: (par[1].total_atendimentos_mes, par[0]))
    return [replace(e, posicao=i) for i, (_, e) in enumerate(ordenados, start=1)]


def proximo_da_vez(entradas: Iterable[PosicaoFila]) -> Optional[PosicaoFila]:
    fila = ordenar_fila(entradas)
    return fila[0] if fila else None
