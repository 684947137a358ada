# core/contacts.py
from __future__ import annotations
import re
from typing import Iterable, Optional

_NON_DIGITS = re.compile(r"\D+")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# emails "de preenchimento" não servem para deduplicar
EMAILS_GENERICOS = {"sem-email@exemplo.com"}


def _only_digits(raw: Optional[str]) -> str:
    return _NON_DIGITS.sub("", raw or "")


def normalize_msisdn_br(raw: Optional[str]) -> Optional[str]:
    """
    Normaliza telefones do Brasil para E.164 (sem +):
    - Mantém DDI 55.
    - Remove '00' inicial, zeros à esquerda após 55.
    - Aceita entradas com/sem DDI; devolve 55 + DDD + número (12 ou 13 dígitos).
    Retorna None se inválido.
    """
    if not raw:
        return None
    digits = _only_digits(raw)

    # remove prefixo discado internacional "00"
    if digits.startswith("00"):
        digits = digits[2:]

    # se veio sem 55 e parece DDD+numero (10 ou 11), prefixa 55
    if not digits.startswith("55") and len(digits) in (10, 11):
        digits = "55" + digits

    # casos "550..." (DDI 55 + zero extra do tronco): 550X... -> 55X...
    if digits.startswith("550"):
        digits = "55" + digits[3:]

    # remover zeros à esquerda APÓS o 55 (nunca remova o 55)
    if digits.startswith("55"):
        resto = digits[2:].lstrip("0")
        digits = "55" + resto

    # validar tamanho final BR: 55 + DDD(2) + número(8 ou 9) => 12 ou 13 dígitos
    if not (digits.startswith("55") and len(digits) in (12, 13) and digits.isdigit()):
        return None

    return digits


def normalize_phone(raw: Optional[str]) -> str:
    """Retorna string normalizada ou "" se inválido."""
    return normalize_msisdn_br(raw) or ""


def normalize_email(raw: Optional[str]) -> str:
    email = (raw or "").strip().lower()
    if not email or email in EMAILS_GENERICOS or not _EMAIL_RE.match(email):
        return ""
    return email


def chaves_contato(email: Optional[str] = None, telefone: Optional[str] = None) -> list[str]:
    """Chaves de deduplicação de um contato: 'email:<...>' e/ou 'tel:<...>'."""
    chaves = []
    e = normalize_email(email)
    if e:
        chaves.append(f"email:{e}")
    t = normalize_phone(telefone)
    if t:
        chaves.append(f"tel:{t}")
    return chaves


def unificar_contatos(registros: Iterable[dict], valor_key: str = "valor") -> list[dict]:
    """
    Deduplica registros (dicts com 'email'/'telefone') vindos de fontes diferentes.
    Dois registros são o mesmo cliente se compartilham email ou telefone normalizado.
    Fica o de maior `valor_key`; em empate, o que apareceu primeiro.
    Registros sem email/telefone válidos nunca são mesclados.
    """
    unicos: list[dict] = []
    por_chave: dict[str, int] = {}

    for reg in registros:
        chaves = chaves_contato(reg.get("email"), reg.get("telefone"))
        idx = next((por_chave[c] for c in chaves if c in por_chave), None)

        if idx is None:
            unicos.append(reg)
            idx = len(unicos) - 1
        elif float(reg.get(valor_key) or 0) > float(unicos[idx].get(valor_key) or 0):
            unicos[idx] = reg

        for c in chaves:
            por_chave.setdefault(c, idx)

    return unicos


def localizar_cliente(email: Optional[str] = None, telefone: Optional[str] = None):
    """
    Resolve cliente existente por contato:
    1) email normalizado (exato, sem caixa);
    2) telefone normalizado (exato);
    3) SUFIXO (últimos 8 dígitos) para dados antigos sem DDI/DDD uniformes.
    Retorna None se não achar.
    """
    from clientes.models import Cliente

    qs = Cliente.objects.all()

    email_norm = normalize_email(email)
    if email_norm:
        c = qs.filter(email__iexact=email_norm).first()
        if c:
            return c

    tel_norm = normalize_msisdn_br(telefone)
    if tel_norm:
        c = qs.filter(telefone=tel_norm).first()
        if c:
            return c
        c = qs.filter(telefone__isnull=False, telefone__endswith=tel_norm[-8:]).first()
        if c:
            return c

    return None
