import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("barbeiros", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="OrdemFila",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("posicao", models.PositiveIntegerField(default=0)),
                ("ativo", models.BooleanField(default=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("barbeiro", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="ordem_fila", to="barbeiros.barbeiro")),
            ],
            options={
                "ordering": ["posicao", "id"],
            },
        ),
        migrations.CreateModel(
            name="AtendimentoDiario",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("data", models.DateField()),
                ("mes", models.CharField(max_length=7)),
                ("atendimentos_diarios", models.PositiveIntegerField(default=0)),
                ("vezes_passou", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("barbeiro", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="atendimentos_diarios", to="barbeiros.barbeiro")),
            ],
            options={
                "ordering": ["data", "barbeiro"],
                "indexes": [models.Index(fields=["mes", "barbeiro"], name="fila_mes_barbeiro_idx")],
                "constraints": [models.UniqueConstraint(fields=("barbeiro", "data", "mes"), name="uniq_fila_barbeiro_data_mes")],
            },
        ),
    ]
