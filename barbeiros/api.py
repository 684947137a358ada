# barbeiros/api.py
from __future__ import annotations

import logging

from django.contrib.auth import authenticate, login, logout, update_session_auth_hash
from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import IsAdmin, IsAdminOrReadOnly
from .models import Barbeiro
from .serializers import (
    BarbeiroSerializer,
    LoginSerializer,
    TrocarSenhaSerializer,
    UsuarioCreateSerializer,
    UsuarioSerializer,
)

log = logging.getLogger(__name__)


# -------------------------------
# Barbeiros (interface única de profissionais)
# -------------------------------
class BarbeiroListCreate(generics.ListCreateAPIView):
    serializer_class = BarbeiroSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_queryset(self):
        qs = Barbeiro.objects.all()
        ativos = (self.request.query_params.get("ativos") or "").strip()
        if ativos in ("1", "true"):
            qs = qs.filter(ativo=True)
        return qs


class BarbeiroRetrieveUpdateDestroy(generics.RetrieveUpdateDestroyAPIView):
    queryset = Barbeiro.objects.all()
    serializer_class = BarbeiroSerializer
    permission_classes = [IsAdminOrReadOnly]

    def perform_destroy(self, instance):
        log.info("[barbeiros] removendo barbeiro id=%s", instance.pk)
        instance.delete()


class BarbeiroToggleAtivo(APIView):
    permission_classes = [IsAdmin]

    def post(self, request, pk: int):
        b = get_object_or_404(Barbeiro, pk=pk)
        b.ativo = not b.ativo
        b.save(update_fields=["ativo"])
        return Response(BarbeiroSerializer(b).data)


# -------------------------------
# Usuários e sessão
# -------------------------------
class UsuarioCreate(generics.CreateAPIView):
    serializer_class = UsuarioCreateSerializer
    permission_classes = [IsAdmin]


class LoginView(APIView):
    """Sessão por cookie; sem CSRF no próprio login."""
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        ser = LoginSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        email = ser.validated_data["email"].strip().lower()
        user = authenticate(request, username=email, password=ser.validated_data["password"])
        if user is None:
            log.info("[auth] login recusado para %s", email)
            return Response({"message": "Email ou senha inválidos."}, status=status.HTTP_401_UNAUTHORIZED)
        login(request, user)
        return Response({"message": "Login realizado com sucesso.", "user": UsuarioSerializer(user).data})


class LogoutView(APIView):
    def post(self, request):
        logout(request)
        return Response({"message": "Logout realizado com sucesso."})


class MeView(APIView):
    def get(self, request):
        return Response(UsuarioSerializer(request.user).data)


class TrocarSenhaView(APIView):
    def post(self, request):
        ser = TrocarSenhaSerializer(data=request.data, context={"request": request})
        ser.is_valid(raise_exception=True)
        request.user.set_password(ser.validated_data["nova_senha"])
        request.user.save(update_fields=["password"])
        update_session_auth_hash(request, request.user)
        return Response({"message": "Senha alterada com sucesso."})
