# servicos/serializers.py
from rest_framework import serializers

from .models import Servico


class ServicoSerializer(serializers.ModelSerializer):
    duracao_min = serializers.IntegerField(min_value=1)
    percentual_comissao = serializers.IntegerField(min_value=0, max_value=100, required=False)

    class Meta:
        model = Servico
        fields = [
            "id", "nome", "preco", "duracao_min", "percentual_comissao",
            "is_assinatura", "descricao", "ativo", "created_at", "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def validate_nome(self, value: str) -> str:
        nome = (value or "").strip()
        if not nome:
            raise serializers.ValidationError("Nome é obrigatório.")
        qs = Servico.objects.filter(nome__iexact=nome)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Já existe um serviço com esse nome.")
        return nome
