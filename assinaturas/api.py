# assinaturas/api.py
from __future__ import annotations

import logging

from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from clientes.services import sincronizar_com_asaas
from core.permissions import IsAdmin, IsAdminOrReadOnly, IsEquipe
from .asaas import cliente_da_conta
from .models import PlanoAssinatura
from .serializers import (
    AsaasAssinaturaInputSerializer,
    AsaasClienteInputSerializer,
    PlanoAssinaturaSerializer,
)
from .sincronizacao import get_sincronizador

log = logging.getLogger(__name__)


# -------------------------------
# Planos
# -------------------------------
class PlanoListCreate(generics.ListCreateAPIView):
    serializer_class = PlanoAssinaturaSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_queryset(self):
        qs = PlanoAssinatura.objects.prefetch_related("servicos_incluidos")
        if (self.request.query_params.get("ativos") or "").strip() in ("1", "true"):
            qs = qs.filter(ativo=True)
        return qs


class PlanoRetrieveUpdateDestroy(generics.RetrieveUpdateDestroyAPIView):
    queryset = PlanoAssinatura.objects.prefetch_related("servicos_incluidos")
    serializer_class = PlanoAssinaturaSerializer
    permission_classes = [IsAdminOrReadOnly]


# -------------------------------
# Asaas (leitura com cache)
# -------------------------------
class AsaasClientes(APIView):
    permission_classes = [IsEquipe]

    def get(self, request):
        itens, falhas = get_sincronizador().listar_clientes()
        return Response({"total": len(itens), "clientes": itens, "falhas": falhas})


class AsaasAssinaturas(APIView):
    permission_classes = [IsEquipe]

    def get(self, request):
        status_ = (request.query_params.get("status") or "").strip().upper() or None
        itens, falhas = get_sincronizador().listar_assinaturas(status=status_)
        return Response({"total": len(itens), "assinaturas": itens, "falhas": falhas})


class AsaasPagamentos(APIView):
    permission_classes = [IsEquipe]

    def get(self, request):
        status_ = (request.query_params.get("status") or "").strip().upper() or None
        itens, falhas = get_sincronizador().listar_pagamentos(status=status_)
        return Response({"total": len(itens), "pagamentos": itens, "falhas": falhas})


# -------------------------------
# Asaas (escrita)
# -------------------------------
class AsaasCriarCliente(APIView):
    permission_classes = [IsEquipe]

    def post(self, request):
        ser = AsaasClienteInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        api = cliente_da_conta(ser.validated_data.get("conta"))
        criado = api.criar_cliente(ser.to_asaas())
        get_sincronizador().limpar()
        log.info("[asaas] cliente criado id=%s conta=%s", criado.get("id"), api.conta)
        return Response({"conta": api.conta, "cliente": criado}, status=status.HTTP_201_CREATED)


class AsaasCriarAssinatura(APIView):
    permission_classes = [IsEquipe]

    def post(self, request):
        ser = AsaasAssinaturaInputSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        api = cliente_da_conta(ser.validated_data.get("conta"))
        criada = api.criar_assinatura(ser.to_asaas())
        get_sincronizador().limpar()
        log.info("[asaas] assinatura criada id=%s conta=%s", criada.get("id"), api.conta)
        return Response({"conta": api.conta, "assinatura": criada}, status=status.HTTP_201_CREATED)


class AsaasSincronizar(APIView):
    permission_classes = [IsEquipe]

    def post(self, request):
        return Response(sincronizar_com_asaas(get_sincronizador()))


class AsaasLimparCache(APIView):
    permission_classes = [IsAdmin]

    def delete(self, request):
        get_sincronizador().limpar()
        return Response(status=status.HTTP_204_NO_CONTENT)
