# barbeiros/serializers.py
from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.db import transaction
from rest_framework import serializers

from core.permissions import papel_de
from .models import Barbeiro, Papel, Perfil

User = get_user_model()


class BarbeiroSerializer(serializers.ModelSerializer):
    percentual_comissao = serializers.IntegerField(min_value=0, max_value=100, required=False)

    class Meta:
        model = Barbeiro
        fields = ["id", "nome", "email", "percentual_comissao", "ativo", "criado_em"]
        read_only_fields = ["criado_em"]

    def validate_nome(self, value: str) -> str:
        nome = (value or "").strip()
        if not nome:
            raise serializers.ValidationError("Nome é obrigatório.")
        return nome

    def validate_email(self, value: str) -> str:
        return (value or "").strip().lower()


class UsuarioCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    papel = serializers.ChoiceField(choices=Papel.choices, default=Papel.BARBEIRO)
    barbeiro_id = serializers.PrimaryKeyRelatedField(
        queryset=Barbeiro.objects.all(), source="barbeiro", required=False, allow_null=True
    )

    def validate_email(self, value: str) -> str:
        email = value.strip().lower()
        if User.objects.filter(username__iexact=email).exists():
            raise serializers.ValidationError("Já existe um usuário com este email.")
        return email

    def validate(self, attrs):
        if attrs.get("papel") == Papel.BARBEIRO and not attrs.get("barbeiro"):
            raise serializers.ValidationError({"barbeiro_id": "Usuário barbeiro precisa de um barbeiro vinculado."})
        return attrs

    @transaction.atomic
    def create(self, validated_data):
        email = validated_data["email"]
        user = User(username=email, email=email)
        user.set_password(validated_data["password"])
        user.save()
        Perfil.objects.create(
            user=user,
            papel=validated_data["papel"],
            barbeiro=validated_data.get("barbeiro"),
        )
        return user

    def to_representation(self, instance):
        return UsuarioSerializer(instance).data


class UsuarioSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.EmailField()

    def to_representation(self, instance):
        data = super().to_representation(instance)
        perfil = getattr(instance, "perfil", None)
        data["papel"] = papel_de(instance)
        data["barbeiro_id"] = perfil.barbeiro_id if perfil else None
        return data


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(write_only=True)


class TrocarSenhaSerializer(serializers.Serializer):
    senha_atual = serializers.CharField(write_only=True)
    nova_senha = serializers.CharField(write_only=True, min_length=6)

    def validate_senha_atual(self, value):
        user = self.context["request"].user
        if not user.check_password(value):
            raise serializers.ValidationError("Senha atual incorreta.")
        return value

    def validate_nova_senha(self, value):
        validate_password(value, self.context["request"].user)
        return value
