# assinaturas/serializers.py
from decimal import Decimal

from rest_framework import serializers

from servicos.models import Servico
from .models import PlanoAssinatura

FORMAS_PAGAMENTO = ("BOLETO", "CREDIT_CARD", "PIX", "UNDEFINED")
CICLOS = ("WEEKLY", "BIWEEKLY", "MONTHLY", "QUARTERLY", "SEMIANNUALLY", "YEARLY")


class PlanoAssinaturaSerializer(serializers.ModelSerializer):
    servicos_incluidos = serializers.PrimaryKeyRelatedField(
        many=True, queryset=Servico.objects.all(), required=False
    )

    class Meta:
        model = PlanoAssinatura
        fields = [
            "id", "nome", "valor_mensal", "descricao", "categoria",
            "servicos_incluidos", "ativo", "created_at",
        ]
        read_only_fields = ["created_at"]

    def validate_valor_mensal(self, v):
        if v <= 0:
            raise serializers.ValidationError("O valor mensal deve ser maior que zero.")
        return v


class ContaMixin(serializers.Serializer):
    conta = serializers.CharField(required=False, allow_blank=True)


class AsaasClienteInputSerializer(ContaMixin):
    nome = serializers.CharField(max_length=120)
    email = serializers.EmailField(required=False, allow_blank=True)
    telefone = serializers.CharField(required=False, allow_blank=True)
    cpf = serializers.CharField(required=False, allow_blank=True)

    def to_asaas(self):
        d = self.validated_data
        return {
            "name": d["nome"],
            "email": d.get("email"),
            "mobilePhone": d.get("telefone"),
            "cpfCnpj": d.get("cpf"),
        }


class AsaasAssinaturaInputSerializer(ContaMixin):
    customer = serializers.CharField()
    valor = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0.01"))
    proximo_vencimento = serializers.DateField()
    forma_pagamento = serializers.ChoiceField(choices=FORMAS_PAGAMENTO, default="UNDEFINED")
    ciclo = serializers.ChoiceField(choices=CICLOS, default="MONTHLY")
    descricao = serializers.CharField(required=False, allow_blank=True)

    def to_asaas(self):
        d = self.validated_data
        return {
            "customer": d["customer"],
            "billingType": d["forma_pagamento"],
            "value": float(d["valor"]),
            "nextDueDate": d["proximo_vencimento"].isoformat(),
            "cycle": d["ciclo"],
            "description": d.get("descricao"),
        }
