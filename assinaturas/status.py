# assinaturas/status.py
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

STATUS_PAGOS = {"RECEIVED", "CONFIRMED", "RECEIVED_IN_CASH"}

ATIVO = "ativo"
INADIMPLENTE = "inadimplente"


def _data(valor) -> Optional[date]:
    if not valor:
        return None
    if isinstance(valor, date):
        return valor
    try:
        return datetime.strptime(str(valor)[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def _data_pagamento(c: dict) -> Optional[date]:
    return _data(c.get("paymentDate")) or _data(c.get("clientPaymentDate")) or _data(c.get("dueDate"))


def vencimento_por_cobrancas(cobrancas: Iterable[dict]) -> Optional[date]:
    """
    Até quando a assinatura está coberta: vencimento da próxima cobrança em
    aberto depois do último pagamento, ou pagamento + 30 dias.
    None se nunca houve pagamento.
    """
    cobrancas = list(cobrancas)
    pagas = [c for c in cobrancas if c.get("status") in STATUS_PAGOS and _data_pagamento(c)]
    if not pagas:
        return None

    ultimo_pagamento = max(_data_pagamento(c) for c in pagas)
    proximas = sorted(
        d for d in (
            _data(c.get("dueDate"))
            for c in cobrancas
            if c.get("status") not in STATUS_PAGOS
        )
        if d and d > ultimo_pagamento
    )
    if proximas:
        return proximas[0]
    return ultimo_pagamento + timedelta(days=30)


def status_por_cobrancas(cobrancas: Iterable[dict], hoje: Optional[date] = None) -> str:
    """
    Classifica um cliente Asaas pelas cobranças:
      - coberto por pagamento (hoje <= vencimento) -> ativo
      - alguma cobrança não paga com vencimento passado -> inadimplente
      - caso contrário (sem cobranças, ou só pendentes no prazo) -> ativo
    """
    cobrancas = list(cobrancas)
    hoje = hoje or date.today()

    vencimento = vencimento_por_cobrancas(cobrancas)
    if vencimento and hoje <= vencimento:
        return ATIVO

    for c in cobrancas:
        if c.get("status") in STATUS_PAGOS:
            continue
        venc = _data(c.get("dueDate"))
        if venc and venc < hoje:
            return INADIMPLENTE
    return ATIVO
