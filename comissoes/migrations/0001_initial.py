import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("barbeiros", "0001_initial"),
        ("servicos", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Distribuicao",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("periodo_inicio", models.DateField()),
                ("periodo_fim", models.DateField()),
                ("faturamento_total", models.DecimalField(decimal_places=2, max_digits=12)),
                ("percentual_comissao", models.PositiveSmallIntegerField(default=40, validators=[django.core.validators.MaxValueValidator(100)])),
                ("total_minutos", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["periodo_inicio"], name="distrib_periodo_idx")],
            },
        ),
        migrations.CreateModel(
            name="DistribuicaoItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantidade", models.PositiveIntegerField(default=0)),
                ("minutos_trabalhados", models.PositiveIntegerField(default=0)),
                ("faturamento_proporcional", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("comissao", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("barbeiro", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="itens_distribuicao", to="barbeiros.barbeiro")),
                ("distribuicao", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="itens", to="comissoes.distribuicao")),
                ("servico", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="itens_distribuicao", to="servicos.servico")),
            ],
            options={
                "ordering": ["distribuicao", "barbeiro", "servico"],
            },
        ),
        migrations.CreateModel(
            name="Comissao",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("mes", models.CharField(max_length=7)),
                ("valor", models.DecimalField(decimal_places=2, max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("barbeiro", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="comissoes", to="barbeiros.barbeiro")),
                ("distribuicao", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="comissoes", to="comissoes.distribuicao")),
            ],
            options={
                "ordering": ["-mes", "barbeiro"],
                "constraints": [models.UniqueConstraint(fields=("barbeiro", "mes"), name="uniq_comissao_barbeiro_mes")],
            },
        ),
        migrations.CreateModel(
            name="TotalServico",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("mes", models.CharField(max_length=7)),
                ("total_mes", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("servico", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="totais_mensais", to="servicos.servico")),
            ],
            options={
                "ordering": ["mes", "servico"],
                "constraints": [models.UniqueConstraint(fields=("servico", "mes"), name="uniq_total_servico_mes")],
            },
        ),
    ]
