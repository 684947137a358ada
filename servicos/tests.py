# servicos/tests.py


def test_filtros(admin_api, make_servico):
    make_servico("Corte", is_assinatura=True)
    make_servico("Barba", ativo=False)
    make_servico("Sobrancelha", descricao="Design com navalha")

    assert [s["nome"] for s in admin_api.get("/api/servicos/?assinatura=1").data] == ["Corte"]
    assert [s["nome"] for s in admin_api.get("/api/servicos/?status=inativos").data] == ["Barba"]
    assert [s["nome"] for s in admin_api.get("/api/servicos/?q=navalha").data] == ["Sobrancelha"]


def test_nome_duplicado_ignora_caixa(admin_api, make_servico):
    make_servico("Corte")
    resp = admin_api.post("/api/servicos/", {"nome": "corte", "duracao_min": 30, "preco": "40.00"}, format="json")
    assert resp.status_code == 400
    assert "nome" in resp.data["errors"]


def test_duracao_positiva(admin_api, db):
    resp = admin_api.post("/api/servicos/", {"nome": "Relâmpago", "duracao_min": 0}, format="json")
    assert resp.status_code == 400


def test_recepcao_so_le(recepcao_api, make_servico):
    corte = make_servico("Corte")
    assert recepcao_api.get(f"/api/servicos/{corte.pk}/").status_code == 200
    assert recepcao_api.patch(f"/api/servicos/{corte.pk}/", {"preco": "10.00"}, format="json").status_code == 403
