# servicos/api.py
from django.db.models import Q
from rest_framework import generics

from core.permissions import IsAdminOrReadOnly
from .models import Servico
from .serializers import ServicoSerializer


class ServicoListCreate(generics.ListCreateAPIView):
    """
    GET  /api/servicos/?q=&status=ativos|inativos|todos&assinatura=1
    POST /api/servicos/
    """
    serializer_class = ServicoSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_queryset(self):
        params = self.request.query_params
        q = (params.get("q") or "").strip()
        status_ = (params.get("status") or "todos").strip()
        assinatura = (params.get("assinatura") or "").strip()

        qs = Servico.objects.all()
        if q:
            qs = qs.filter(Q(nome__icontains=q) | Q(descricao__icontains=q))
        if status_ == "ativos":
            qs = qs.filter(ativo=True)
        elif status_ == "inativos":
            qs = qs.filter(ativo=False)
        if assinatura in ("1", "true"):
            qs = qs.filter(is_assinatura=True)
        return qs.order_by("nome")


class ServicoRetrieveUpdateDestroy(generics.RetrieveUpdateDestroyAPIView):
    queryset = Servico.objects.all()
    serializer_class = ServicoSerializer
    permission_classes = [IsAdminOrReadOnly]
