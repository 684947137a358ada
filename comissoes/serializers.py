# comissoes/serializers.py
from decimal import Decimal

from django.conf import settings
from rest_framework import serializers

from core.periodos import parse_mes
from servicos.models import Servico
from .models import Comissao, Distribuicao, DistribuicaoItem, TotalServico


class LancamentoInputSerializer(serializers.Serializer):
    barbeiro_id = serializers.IntegerField(min_value=1)
    servico_id = serializers.IntegerField(min_value=1)
    quantidade = serializers.IntegerField(min_value=0)


class CalcularDistribuicaoSerializer(serializers.Serializer):
    faturamento_total = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0"))
    percentual_comissao = serializers.IntegerField(min_value=0, max_value=100, required=False)
    lancamentos = LancamentoInputSerializer(many=True, required=False)
    barbeiros = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False)
    apenas_assinatura = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        attrs.setdefault("percentual_comissao", settings.COMISSAO_PERCENTUAL_PADRAO)
        attrs.setdefault("lancamentos", [])
        return attrs


class SalvarDistribuicaoSerializer(CalcularDistribuicaoSerializer):
    periodo_inicio = serializers.DateField()
    periodo_fim = serializers.DateField()

    def validate(self, attrs):
        attrs = super().validate(attrs)
        if attrs["periodo_fim"] < attrs["periodo_inicio"]:
            raise serializers.ValidationError("O fim do período não pode ser anterior ao início.")
        return attrs


class DistribuicaoItemSerializer(serializers.ModelSerializer):
    barbeiro_nome = serializers.CharField(source="barbeiro.nome", read_only=True)
    servico_nome = serializers.CharField(source="servico.nome", read_only=True)

    class Meta:
        model = DistribuicaoItem
        fields = [
            "id", "barbeiro", "barbeiro_nome", "servico", "servico_nome", "quantidade",
            "minutos_trabalhados", "faturamento_proporcional", "comissao",
        ]


class DistribuicaoSerializer(serializers.ModelSerializer):
    class Meta:
        model = Distribuicao
        fields = [
            "id", "periodo_inicio", "periodo_fim", "faturamento_total",
            "percentual_comissao", "total_minutos", "created_at",
        ]


class DistribuicaoDetalheSerializer(DistribuicaoSerializer):
    itens = DistribuicaoItemSerializer(many=True, read_only=True)

    class Meta(DistribuicaoSerializer.Meta):
        fields = DistribuicaoSerializer.Meta.fields + ["itens"]


class ComissaoSerializer(serializers.ModelSerializer):
    class Meta:
        model = Comissao
        fields = ["id", "barbeiro", "mes", "valor", "distribuicao", "created_at", "updated_at"]


class TotalServicoSerializer(serializers.ModelSerializer):
    servico = serializers.PrimaryKeyRelatedField(queryset=Servico.objects.all())
    servico_nome = serializers.CharField(source="servico.nome", read_only=True)

    class Meta:
        model = TotalServico
        fields = ["id", "servico", "servico_nome", "mes", "total_mes"]
        # upsert por (servico, mes) é feito no service
        validators = []

    def validate_mes(self, v):
        try:
            return parse_mes(v)
        except ValueError as e:
            raise serializers.ValidationError(str(e))
