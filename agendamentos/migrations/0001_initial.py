import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("barbeiros", "0001_initial"),
        ("clientes", "0001_initial"),
        ("servicos", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Agendamento",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("cliente_nome", models.CharField(blank=True, max_length=120)),
                ("data_hora", models.DateTimeField()),
                ("status", models.CharField(choices=[("AGENDADO", "Agendado"), ("FINALIZADO", "Finalizado"), ("CANCELADO", "Cancelado")], default="AGENDADO", max_length=12)),
                ("observacoes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("barbeiro", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="agendamentos", to="barbeiros.barbeiro")),
                ("cliente", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="agendamentos", to="clientes.cliente")),
                ("servico", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="agendamentos", to="servicos.servico")),
            ],
            options={
                "ordering": ["data_hora"],
                "indexes": [
                    models.Index(fields=["data_hora"], name="ag_data_hora_idx"),
                    models.Index(fields=["status"], name="ag_status_idx"),
                    models.Index(fields=["barbeiro", "data_hora"], name="ag_barbeiro_data_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Atendimento",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("data_atendimento", models.DateTimeField(default=django.utils.timezone.now)),
                ("quantidade", models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("mes", models.CharField(db_index=True, editable=False, max_length=7)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("agendamento", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="atendimento", to="agendamentos.agendamento")),
                ("barbeiro", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="atendimentos", to="barbeiros.barbeiro")),
                ("servico", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="atendimentos", to="servicos.servico")),
            ],
            options={
                "ordering": ["-data_atendimento"],
                "indexes": [models.Index(fields=["barbeiro", "mes"], name="atend_barbeiro_mes_idx")],
                "constraints": [models.CheckConstraint(condition=models.Q(("quantidade__gte", 1)), name="atend_quantidade_gte_1")],
            },
        ),
    ]
