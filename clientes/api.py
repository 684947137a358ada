# clientes/api.py
from __future__ import annotations

from django.db.models import Q
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from assinaturas.sincronizacao import get_sincronizador
from core.periodos import parse_inteiro
from core.permissions import IsEquipe
from . import services
from .models import Cliente
from .serializers import ClienteManualSerializer, ClienteSerializer, ImportarLoteSerializer


class ClienteListCreate(generics.ListCreateAPIView):
    """
    GET  /api/clientes/?q=&status=ATIVO|INATIVO|INADIMPLENTE&origem=
    POST /api/clientes/
    """
    serializer_class = ClienteSerializer
    permission_classes = [IsEquipe]

    def get_queryset(self):
        params = self.request.query_params
        q = (params.get("q") or "").strip()
        status_ = (params.get("status") or "").strip().upper()
        origem = (params.get("origem") or "").strip().upper()

        qs = Cliente.objects.all()
        if q:
            qs = qs.filter(Q(nome__icontains=q) | Q(email__icontains=q) | Q(telefone__icontains=q))
        if status_:
            qs = qs.filter(status_assinatura=status_)
        if origem:
            qs = qs.filter(origem=origem)
        return qs.order_by("nome")


class ClienteRetrieveUpdateDestroy(generics.RetrieveUpdateDestroyAPIView):
    queryset = Cliente.objects.all()
    serializer_class = ClienteSerializer
    permission_classes = [IsEquipe]


class ClientesUnificados(APIView):
    permission_classes = [IsEquipe]

    def get(self, request):
        return Response(services.clientes_unificados(get_sincronizador()))


class ClientesStats(APIView):
    permission_classes = [IsEquipe]

    def get(self, request):
        return Response(services.estatisticas())


class ClientesVencendo(APIView):
    permission_classes = [IsEquipe]

    def get(self, request):
        dias = request.query_params.get("dias")
        qs = services.vencendo(parse_inteiro(dias, "dias") if dias else None)
        return Response(ClienteSerializer(qs, many=True).data)


class ClientesVencidos(APIView):
    permission_classes = [IsEquipe]

    def get(self, request):
        return Response(ClienteSerializer(services.vencidos(), many=True).data)


class CadastroManual(APIView):
    permission_classes = [IsEquipe]

    def post(self, request):
        ser = ClienteManualSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        cliente, criado = services.cadastro_manual(dict(ser.validated_data))
        return Response(
            {
                "message": "Cliente cadastrado com sucesso." if criado else "Cliente atualizado com sucesso.",
                "cliente": ClienteSerializer(cliente).data,
            },
            status=status.HTTP_201_CREATED if criado else status.HTTP_200_OK,
        )


class ImportarLote(APIView):
    permission_classes = [IsEquipe]

    def post(self, request):
        ser = ImportarLoteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        return Response(services.importar_lote(ser.validated_data["clientes"]))
