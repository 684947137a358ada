# servicos/migrations/0002_seed_iniciais.py
from django.db import migrations
from decimal import Decimal

BASE = [
    # nome, duração, preço, entra na assinatura
    ("Corte masculino",            30, Decimal("45.00"), True),
    ("Barba tradicional",          30, Decimal("35.00"), True),
    ("Corte + barba",              60, Decimal("75.00"), True),
    ("Sobrancelha (navalha)",      15, Decimal("20.00"), False),
    ("Hidratação capilar",         30, Decimal("35.00"), False),
    ("Pigmentação barba/cabelo",   45, Decimal("60.00"), False),
    ("Platinado (básico)",        120, Decimal("180.00"), False),
]


def seed(apps, schema_editor):
    Servico = apps.get_model("servicos", "Servico")
    for nome, dur, preco, assinatura in BASE:
        Servico.objects.update_or_create(
            nome=nome,
            defaults={"duracao_min": dur, "preco": preco, "is_assinatura": assinatura, "ativo": True},
        )


def unseed(apps, schema_editor):
    Servico = apps.get_model("servicos", "Servico")
    Servico.objects.filter(nome__in=[b[0] for b in BASE]).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("servicos", "0001_initial"),
    ]
    operations = [
        migrations.RunPython(seed, unseed),
    ]
