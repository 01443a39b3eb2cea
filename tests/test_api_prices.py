def _price(price_id, **prices):
    return {"id": price_id, "code": f"SKU-{price_id}", "um": "UN", "prices": prices}


def test_create_requires_id(client):
    response = client.post("/prices", json={"code": "X"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing price data or id"}


def test_env_filter_keeps_records_with_prices_for_env(client):
    client.post("/prices", json=_price("p1", HML={"SP": "10"}, PRD={}))
    client.post("/prices", json=_price("p2", PRD={"RJ": "12"}))
    client.post("/prices", json=_price("p3", HML={"MG": "9"}, PRD={"MG": "11"}))

    hml = client.get("/prices", params={"env": "HML"}).json()
    assert sorted(p["id"] for p in hml["data"]) == ["p1", "p3"]
    prd = client.get("/prices", params={"env": "PRD"}).json()
    assert sorted(p["id"] for p in prd["data"]) == ["p2", "p3"]


def test_search_matches_code(client):
    client.post("/prices", json=_price("p1"))
    client.post("/prices", json={"id": "p2", "code": "OTHER", "um": "UN"})
    body = client.get("/prices", params={"search": "sku-"}).json()
    assert [p["id"] for p in body["data"]] == ["p1"]


def test_update_merges_nested_price_tables(client):
    client.post("/prices", json=_price("p1", HML={"SP": "10", "RJ": "11"}, PRD={"SP": "12"}))

    response = client.put("/prices/p1", json={"prices": {"HML": {"SP": "15"}}})
    assert response.status_code == 200

    stored = client.get("/prices/p1").json()
    assert stored["prices"]["HML"] == {"SP": "15", "RJ": "11"}
    assert stored["prices"]["PRD"] == {"SP": "12"}
    assert stored["code"] == "SKU-p1"


def test_missing_price_and_delete(client):
    assert client.get("/prices/p9").json() == {"error": "Price not found"}
    client.post("/prices", json=_price("p9"))
    assert client.get("/prices/count").json() == {"count": 1}
    assert client.delete("/prices/p9").json()["success"] is True
    assert client.get("/prices/count").json() == {"count": 0}
