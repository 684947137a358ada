from decimal import Decimal
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Servico",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("nome", models.CharField(max_length=120, unique=True)),
                ("preco", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=8)),
                ("duracao_min", models.PositiveIntegerField(default=30, validators=[django.core.validators.MinValueValidator(1)])),
                ("percentual_comissao", models.PositiveSmallIntegerField(default=40, validators=[django.core.validators.MaxValueValidator(100)])),
                ("is_assinatura", models.BooleanField(default=False)),
                ("descricao", models.TextField(blank=True, null=True)),
                ("ativo", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["nome"],
                "indexes": [models.Index(fields=["nome"], name="servico_nome_idx")],
            },
        ),
    ]
