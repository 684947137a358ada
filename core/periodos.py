# core/periodos.py
from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from django.utils import timezone

from core.erros import RegraDeNegocio

_MES_RE = re.compile(r"^(\d{4})-(\d{2})$")


def mes_de(d: date | datetime) -> str:
    """'YYYY-MM' da data (datetimes aware são convertidos para o fuso local)."""
    if isinstance(d, datetime) and timezone.is_aware(d):
        d = timezone.localtime(d)
    return f"{d.year:04d}-{d.month:02d}"


def mes_atual() -> str:
    return mes_de(timezone.localdate())


def parse_mes(mes: str | None) -> str:
    """Valida 'YYYY-MM'. Levanta RegraDeNegocio se inválido."""
    m = _MES_RE.match((mes or "").strip())
    if not m or not 1 <= int(m.group(2)) <= 12:
        raise RegraDeNegocio(f"Mês inválido: '{mes}'. Use 'YYYY-MM'.")
    return m.group(0)


def parse_data(s: str | None) -> date:
    try:
        return datetime.strptime((s or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise RegraDeNegocio(f"Data inválida: '{s}'. Use 'YYYY-MM-DD'.")


def limites_do_mes(mes: str) -> tuple[date, date]:
    """[primeiro dia do mês, primeiro dia do mês seguinte)."""
    y, mm = map(int, parse_mes(mes).split("-"))
    first = date(y, mm, 1)
    nxt = (first.replace(day=28) + timedelta(days=4)).replace(day=1)
    return first, nxt


def janela_do_mes(mes: str) -> tuple[datetime, datetime]:
    """Mesmo que limites_do_mes, em datetimes aware no fuso local."""
    first, nxt = limites_do_mes(mes)
    tz = timezone.get_current_timezone()
    return (
        timezone.make_aware(datetime(first.year, first.month, first.day), tz),
        timezone.make_aware(datetime(nxt.year, nxt.month, nxt.day), tz),
    )


def formatar_minutos(minutos: int) -> str:
    """90 -> '1h 30min'; 60 -> '1h'; 45 -> '45min'."""
    horas, resto = divmod(int(minutos or 0), 60)
    if horas == 0:
        return f"{resto}min"
    if resto == 0:
        return f"{horas}h"
    return f"{horas}h {resto}min"


def parse_inteiro(valor: str | None, campo: str) -> int:
    try:
        return int((valor or "").strip())
    except ValueError:
        raise RegraDeNegocio(f"Parâmetro '{campo}' deve ser um número inteiro.")
