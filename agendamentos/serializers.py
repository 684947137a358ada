# agendamentos/serializers.py
from rest_framework import serializers

from barbeiros.models import Barbeiro
from clientes.models import Cliente
from servicos.models import Servico
from .models import Agendamento, Atendimento


class AgendamentoSerializer(serializers.ModelSerializer):
    cliente = serializers.PrimaryKeyRelatedField(queryset=Cliente.objects.all(), required=False, allow_null=True)
    barbeiro = serializers.PrimaryKeyRelatedField(queryset=Barbeiro.objects.all())
    servico = serializers.PrimaryKeyRelatedField(queryset=Servico.objects.all())
    barbeiro_nome = serializers.CharField(source="barbeiro.nome", read_only=True)
    servico_nome = serializers.CharField(source="servico.nome", read_only=True)
    duracao_min = serializers.IntegerField(source="servico.duracao_min", read_only=True)

    class Meta:
        model = Agendamento
        fields = [
            "id", "cliente", "cliente_nome", "barbeiro", "barbeiro_nome",
            "servico", "servico_nome", "duracao_min", "data_hora", "status",
            "observacoes", "created_at", "updated_at",
        ]
        read_only_fields = ["status", "created_at", "updated_at"]

    def validate_barbeiro(self, b):
        if not b.ativo:
            raise serializers.ValidationError("Barbeiro inativo.")
        return b

    def validate(self, attrs):
        cliente = attrs.get("cliente", getattr(self.instance, "cliente", None))
        nome = attrs.get("cliente_nome", getattr(self.instance, "cliente_nome", ""))
        if not cliente and not (nome or "").strip():
            raise serializers.ValidationError("Informe o cliente ou o nome do cliente.")
        if self.instance and self.instance.status != "AGENDADO":
            raise serializers.ValidationError("Só é possível editar agendamentos AGENDADOS.")
        return attrs


class AtendimentoSerializer(serializers.ModelSerializer):
    barbeiro = serializers.PrimaryKeyRelatedField(queryset=Barbeiro.objects.all())
    servico = serializers.PrimaryKeyRelatedField(queryset=Servico.objects.all())
    barbeiro_nome = serializers.CharField(source="barbeiro.nome", read_only=True)
    servico_nome = serializers.CharField(source="servico.nome", read_only=True)
    minutos = serializers.IntegerField(read_only=True)

    class Meta:
        model = Atendimento
        fields = [
            "id", "barbeiro", "barbeiro_nome", "servico", "servico_nome",
            "data_atendimento", "quantidade", "minutos", "mes", "agendamento", "created_at",
        ]
        read_only_fields = ["mes", "agendamento", "created_at"]

    def validate_quantidade(self, v):
        if v < 1:
            raise serializers.ValidationError("A quantidade deve ser pelo menos 1.")
        return v
