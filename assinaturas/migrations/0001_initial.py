from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("servicos", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PlanoAssinatura",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=120)),
                ("valor_mensal", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("descricao", models.TextField(blank=True, null=True)),
                ("categoria", models.CharField(blank=True, max_length=60)),
                ("ativo", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("servicos_incluidos", models.ManyToManyField(blank=True, related_name="planos", to="servicos.servico")),
            ],
            options={
                "ordering": ["valor_mensal", "nome"],
            },
        ),
    ]
