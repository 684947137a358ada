# clientes/serializers.py
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone
from rest_framework import serializers

from core.contacts import normalize_email, normalize_phone
from .models import Cliente, Origem, StatusAssinatura


def _validar_contato(attrs):
    if not attrs.get("email") and not attrs.get("telefone"):
        raise serializers.ValidationError("Informe email ou telefone.")


class ClienteSerializer(serializers.ModelSerializer):
    dias_para_vencer = serializers.SerializerMethodField()

    class Meta:
        model = Cliente
        fields = [
            "id", "nome", "email", "telefone", "cpf", "origem", "asaas_customer_id",
            "plano_nome", "plano_valor", "forma_pagamento", "status_assinatura",
            "data_inicio_assinatura", "data_vencimento_assinatura", "dias_para_vencer",
            "created_at", "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def get_dias_para_vencer(self, obj):
        return obj.dias_para_vencer()

    def validate_email(self, v):
        return normalize_email(v)

    def validate_telefone(self, v):
        if v and not normalize_phone(v):
            raise serializers.ValidationError("Telefone inválido.")
        return normalize_phone(v)


class ClienteManualSerializer(serializers.Serializer):
    """Cadastro de assinante com pagamento fora do Asaas (origem EXTERNO)."""
    nome = serializers.CharField(max_length=120)
    email = serializers.CharField(required=False, allow_blank=True, default="")
    telefone = serializers.CharField(required=False, allow_blank=True, default="")
    cpf = serializers.CharField(required=False, allow_blank=True, default="")
    plano_nome = serializers.CharField(max_length=120)
    plano_valor = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))
    forma_pagamento = serializers.CharField(required=False, allow_blank=True, default="")
    data_inicio_assinatura = serializers.DateField(required=False, allow_null=True, default=None)
    data_vencimento_assinatura = serializers.DateField(required=False, allow_null=True, default=None)

    def validate_nome(self, v):
        v = v.strip()
        if not v:
            raise serializers.ValidationError("Nome é obrigatório.")
        return v

    def validate_email(self, v):
        if v and not normalize_email(v):
            raise serializers.ValidationError("Email inválido.")
        return normalize_email(v)

    def validate_telefone(self, v):
        if v and not normalize_phone(v):
            raise serializers.ValidationError("Telefone inválido.")
        return normalize_phone(v)

    def validate(self, attrs):
        _validar_contato(attrs)
        inicio = attrs.get("data_inicio_assinatura") or timezone.localdate()
        attrs["data_inicio_assinatura"] = inicio
        if not attrs.get("data_vencimento_assinatura"):
            attrs["data_vencimento_assinatura"] = inicio + timedelta(days=30)
        if attrs["data_vencimento_assinatura"] < inicio:
            raise serializers.ValidationError("O vencimento não pode ser anterior ao início.")
        attrs["origem"] = Origem.EXTERNO
        attrs["status_assinatura"] = StatusAssinatura.ATIVO
        return attrs


class ImportarLoteSerializer(serializers.Serializer):
    clientes = serializers.ListField(child=serializers.DictField(), allow_empty=False, max_length=1000)
