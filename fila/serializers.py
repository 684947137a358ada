# fila/serializers.py
from dataclasses import asdict

from rest_framework import serializers

from barbeiros.models import Barbeiro
from .models import AtendimentoDiario, OrdemFila


def posicao_to_dict(p):
    return asdict(p) if p is not None else None


class AtendimentoDiarioSerializer(serializers.ModelSerializer):
    barbeiro = serializers.PrimaryKeyRelatedField(queryset=Barbeiro.objects.all())
    barbeiro_nome = serializers.CharField(source="barbeiro.nome", read_only=True)

    class Meta:
        model = AtendimentoDiario
        fields = ["id", "barbeiro", "barbeiro_nome", "data", "mes", "atendimentos_diarios", "vezes_passou"]
        read_only_fields = ["mes"]
        # duplicidade do dia fica com a constraint do banco (409)
        validators = []


class OrdemFilaSerializer(serializers.ModelSerializer):
    barbeiro_nome = serializers.CharField(source="barbeiro.nome", read_only=True)
    barbeiro_ativo = serializers.BooleanField(source="barbeiro.ativo", read_only=True)

    class Meta:
        model = OrdemFila
        fields = ["id", "barbeiro", "barbeiro_nome", "barbeiro_ativo", "posicao", "ativo", "updated_at"]


class AdicionarAtendimentoSerializer(serializers.Serializer):
    barbeiro_id = serializers.PrimaryKeyRelatedField(
        queryset=Barbeiro.objects.all(), required=False, allow_null=True
    )
    data = serializers.DateField(required=False, allow_null=True)


class PassarVezSerializer(serializers.Serializer):
    barbeiro_id = serializers.PrimaryKeyRelatedField(queryset=Barbeiro.objects.all())
    data = serializers.DateField(required=False, allow_null=True)


class ZerarSerializer(serializers.Serializer):
    mes = serializers.RegexField(r"^\d{4}-(0[1-9]|1[0-2])$", required=False)


class LinhaDiaSerializer(serializers.Serializer):
    barbeiro_id = serializers.PrimaryKeyRelatedField(queryset=Barbeiro.objects.all())
    atendimentos_diarios = serializers.IntegerField(min_value=0, default=0)
    vezes_passou = serializers.IntegerField(min_value=0, default=0)


class SalvarDiaSerializer(serializers.Serializer):
    data = serializers.DateField()
    atendimentos = LinhaDiaSerializer(many=True)

    def validate_atendimentos(self, linhas):
        ids = [l["barbeiro_id"].pk for l in linhas]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError("Barbeiro repetido no mesmo dia.")
        return [{**l, "barbeiro_id": l["barbeiro_id"].pk} for l in linhas]


class ReordenarSerializer(serializers.Serializer):
    ordem = serializers.ListField(child=serializers.IntegerField(min_value=1), allow_empty=False)
