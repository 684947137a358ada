from decimal import Decimal
from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Cliente",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=120)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("telefone", models.CharField(blank=True, max_length=20)),
                ("cpf", models.CharField(blank=True, max_length=18)),
                ("origem", models.CharField(choices=[("ASAAS_PRINCIPAL", "Asaas Principal"), ("ASAAS_ANDREY", "Asaas Andrey"), ("EXTERNO", "Pagamento externo")], default="EXTERNO", max_length=20)),
                ("asaas_customer_id", models.CharField(blank=True, max_length=40, null=True)),
                ("plano_nome", models.CharField(blank=True, max_length=120)),
                ("plano_valor", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("forma_pagamento", models.CharField(blank=True, max_length=30)),
                ("status_assinatura", models.CharField(choices=[("ATIVO", "Ativo"), ("INATIVO", "Inativo"), ("INADIMPLENTE", "Inadimplente")], default="ATIVO", max_length=14)),
                ("data_inicio_assinatura", models.DateField(blank=True, null=True)),
                ("data_vencimento_assinatura", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["nome"],
                "indexes": [
                    models.Index(fields=["nome"], name="cliente_nome_idx"),
                    models.Index(fields=["email"], name="cliente_email_idx"),
                    models.Index(fields=["telefone"], name="cliente_telefone_idx"),
                    models.Index(fields=["status_assinatura", "data_vencimento_assinatura"], name="cliente_status_venc_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(condition=models.Q(("asaas_customer_id__isnull", False)), fields=("origem", "asaas_customer_id"), name="uniq_cliente_por_conta_asaas"),
                ],
            },
        ),
    ]
