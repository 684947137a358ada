# comissoes/services.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Iterable

from django.conf import settings
from django.db import transaction
from django.db.models import Sum

from agendamentos.models import Atendimento
from barbeiros.models import Barbeiro
from clientes.services import receita_assinaturas_do_mes
from core.erros import RegraDeNegocio
from core.periodos import formatar_minutos, limites_do_mes, mes_de
from servicos.models import Servico
from .distribuicao import (
    Lancamento,
    ResultadoDistribuicao,
    calcular_distribuicao,
    quantizar,
)
from .models import Comissao, Distribuicao, DistribuicaoItem, TotalServico

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Distribuição informada pelo admin
# ------------------------------------------------------------
def lancamentos_de(itens: Iterable[dict], apenas_assinatura: bool = False) -> list[Lancamento]:
    """Resolve a duração dos serviços; ids desconhecidos viram RegraDeNegocio."""
    itens = list(itens)
    servicos = Servico.objects.in_bulk({i["servico_id"] for i in itens})
    barbeiros = set(
        Barbeiro.objects.filter(pk__in={i["barbeiro_id"] for i in itens}).values_list("pk", flat=True)
    )

    out = []
    for i in itens:
        servico = servicos.get(i["servico_id"])
        if servico is None:
            raise RegraDeNegocio(f"Serviço {i['servico_id']} não encontrado.")
        if i["barbeiro_id"] not in barbeiros:
            raise RegraDeNegocio(f"Barbeiro {i['barbeiro_id']} não encontrado.")
        if apenas_assinatura and not servico.is_assinatura:
            continue
        out.append(Lancamento(
            barbeiro_id=i["barbeiro_id"],
            servico_id=servico.pk,
            quantidade=i["quantidade"],
            duracao_min=servico.duracao_min,
        ))
    return out


def _exigir_barbeiros(ids: Iterable[int]) -> list[int]:
    ids = list(ids)
    existentes = set(Barbeiro.objects.filter(pk__in=ids).values_list("pk", flat=True))
    faltando = [i for i in ids if i not in existentes]
    if faltando:
        raise RegraDeNegocio(f"Barbeiros não encontrados: {faltando}")
    return ids


def calcular(dados: dict) -> ResultadoDistribuicao:
    return calcular_distribuicao(
        lancamentos_de(dados.get("lancamentos") or [], dados.get("apenas_assinatura", False)),
        dados["faturamento_total"],
        dados.get("percentual_comissao", settings.COMISSAO_PERCENTUAL_PADRAO),
        _exigir_barbeiros(dados.get("barbeiros") or []) or None,
    )


@transaction.atomic
def salvar(dados: dict) -> Distribuicao:
    """
    Recalcula no servidor e grava a distribuição, seus itens e a comissão
    de cada barbeiro no mês de periodo_inicio (substitui a anterior do mês).
    """
    resultado = calcular(dados)
    dist = Distribuicao.objects.create(
        periodo_inicio=dados["periodo_inicio"],
        periodo_fim=dados["periodo_fim"],
        faturamento_total=quantizar(resultado.faturamento_total),
        percentual_comissao=int(resultado.percentual_comissao),
        total_minutos=resultado.total_minutos,
    )
    DistribuicaoItem.objects.bulk_create([
        DistribuicaoItem(
            distribuicao=dist,
            barbeiro_id=item.barbeiro_id,
            servico_id=item.servico_id,
            quantidade=item.quantidade,
            minutos_trabalhados=item.minutos,
            faturamento_proporcional=quantizar(item.faturamento_proporcional),
            comissao=quantizar(item.comissao),
        )
        for p in resultado.participacoes
        for item in p.itens
    ])

    mes = mes_de(dados["periodo_inicio"])
    for p in resultado.participacoes:
        Comissao.objects.update_or_create(
            barbeiro_id=p.barbeiro_id,
            mes=mes,
            defaults={"valor": quantizar(p.comissao), "distribuicao": dist},
        )
    # barbeiro fora da nova distribuição perde a comissão do mês
    Comissao.objects.filter(mes=mes).exclude(
        barbeiro_id__in=[p.barbeiro_id for p in resultado.participacoes]
    ).delete()

    logger.info("[comissoes] distribuição %s salva (%s barbeiros, mes=%s)", dist.pk, len(resultado.participacoes), mes)
    return dist


def resultado_to_dict(resultado: ResultadoDistribuicao) -> dict:
    nomes = dict(
        Barbeiro.objects
        .filter(pk__in=[p.barbeiro_id for p in resultado.participacoes])
        .values_list("pk", "nome")
    )
    return {
        "resultados": [
            {
                "barbeiro": {"id": p.barbeiro_id, "nome": nomes.get(p.barbeiro_id, "")},
                "minutos_trabalhados": p.minutos_trabalhados,
                "quantidade": p.quantidade,
                "percentual_participacao": quantizar(p.percentual_participacao),
                "faturamento_proporcional": quantizar(p.faturamento_proporcional),
                "comissao": quantizar(p.comissao),
                "itens": [
                    {
                        "servico_id": i.servico_id,
                        "quantidade": i.quantidade,
                        "minutos": i.minutos,
                        "faturamento_proporcional": quantizar(i.faturamento_proporcional),
                        "comissao": quantizar(i.comissao),
                    }
                    for i in p.itens
                ],
            }
            for p in resultado.participacoes
        ],
        "faturamento_total": quantizar(resultado.faturamento_total),
        "percentual_comissao": resultado.percentual_comissao,
        "total_minutos": resultado.total_minutos,
        "pool_comissao": quantizar(resultado.pool_comissao),
        "total_comissao": quantizar(resultado.total_comissao),
    }


# ------------------------------------------------------------
# Relatórios a partir do livro de atendimentos
# ------------------------------------------------------------
def lancamentos_do_mes(mes: str) -> list[Lancamento]:
    rows = (
        Atendimento.objects
        .filter(mes=mes)
        .values("barbeiro_id", "servico_id", "servico__duracao_min")
        .annotate(qtd=Sum("quantidade"))
        .order_by("barbeiro_id", "servico_id")
    )
    return [
        Lancamento(
            barbeiro_id=r["barbeiro_id"],
            servico_id=r["servico_id"],
            quantidade=r["qtd"],
            duracao_min=r["servico__duracao_min"],
        )
        for r in rows
    ]


def relatorio_mensal(mes: str) -> list[dict]:
    """Barbeiros ativos com a fatia da receita de assinaturas do mês, maior primeiro."""
    ativos = list(Barbeiro.objects.filter(ativo=True))
    resultado = calcular_distribuicao(
        lancamentos_do_mes(mes),
        receita_assinaturas_do_mes(mes),
        settings.COMISSAO_PERCENTUAL_PADRAO,
        [b.pk for b in ativos],
    )
    por_barbeiro = resultado.por_barbeiro()

    linhas = []
    for b in ativos:
        p = por_barbeiro[b.pk]
        linhas.append({
            "barbeiro": {"id": b.pk, "nome": b.nome, "email": b.email},
            "faturamento_assinatura": quantizar(p.faturamento_proporcional),
            "comissao_assinatura": quantizar(p.comissao),
            "minutos_trabalhados_mes": p.minutos_trabalhados,
            "horas_trabalhadas_mes": formatar_minutos(p.minutos_trabalhados),
            "numero_servicos": p.quantidade,
            "percentual_tempo": quantizar(p.percentual_participacao),
        })
    linhas.sort(key=lambda l: l["faturamento_assinatura"], reverse=True)
    return linhas


def estatisticas_mes(mes: str) -> dict:
    faturamento = receita_assinaturas_do_mes(mes)
    total_minutos = sum(l.minutos for l in lancamentos_do_mes(mes))
    return {
        "mes": mes,
        "faturamento_total_assinatura": quantizar(faturamento),
        "total_minutos_gerais": total_minutos,
        "total_comissao": quantizar(faturamento * settings.COMISSAO_PERCENTUAL_PADRAO / 100),
    }


def comissao_atual(barbeiro_id: int, mes: str) -> dict:
    """
    Comissão corrente do barbeiro no mês: receita e percentual da última
    distribuição salva do mês, ou receita de assinaturas e percentual padrão.
    """
    first, nxt = limites_do_mes(mes)
    ultima = (
        Distribuicao.objects
        .filter(periodo_inicio__gte=first, periodo_inicio__lt=nxt)
        .order_by("-created_at", "-id")
        .first()
    )
    if ultima:
        faturamento, percentual, fonte = ultima.faturamento_total, ultima.percentual_comissao, "distribuicao"
    else:
        faturamento = receita_assinaturas_do_mes(mes)
        percentual, fonte = settings.COMISSAO_PERCENTUAL_PADRAO, "assinaturas"

    resultado = calcular_distribuicao(lancamentos_do_mes(mes), faturamento, percentual, [barbeiro_id])
    p = resultado.por_barbeiro()[barbeiro_id]
    return {
        "barbeiro_id": barbeiro_id,
        "mes": mes,
        "minutos_trabalhados_mes": p.minutos_trabalhados,
        "percentual_participacao": quantizar(p.percentual_participacao),
        "faturamento_proporcional": quantizar(p.faturamento_proporcional),
        "comissao_calculada": quantizar(p.comissao),
        "faturamento_total": quantizar(Decimal(faturamento)),
        "percentual_comissao": percentual,
        "fonte": fonte,
    }


# ------------------------------------------------------------
# Tetos mensais por serviço
# ------------------------------------------------------------
def salvar_total_servico(servico: Servico, mes: str, total_mes: int) -> TotalServico:
    obj, _ = TotalServico.objects.update_or_create(
        servico=servico, mes=mes, defaults={"total_mes": total_mes}
    )
    return obj


def validar_limites(mes: str) -> dict:
    usados = dict(
        Atendimento.objects
        .filter(mes=mes)
        .values("servico_id")
        .annotate(qtd=Sum("quantidade"))
        .order_by()
        .values_list("servico_id", "qtd")
    )
    violacoes = [
        {
            "servico_id": t.servico_id,
            "servico_nome": t.servico.nome,
            "used": usados.get(t.servico_id, 0),
            "limit": t.total_mes,
        }
        for t in TotalServico.objects.filter(mes=mes).select_related("servico")
        if usados.get(t.servico_id, 0) > t.total_mes
    ]
    return {"mes": mes, "valid": not violacoes, "violations": violacoes}
