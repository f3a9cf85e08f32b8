import uuid

from conftest import login, pago_payload


def test_requires_authentication(client):
    assert client.get("/api/pagos").status_code == 401


def test_create_and_get_pago(client, propietario):
    headers = login(client, propietario.email)
    response = client.post("/api/pagos", json=pago_payload(codigoSeguridad="123456"), headers=headers)
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["nombrePagador"] == "Juan Perez"
    assert data["usuarioId"] == str(propietario.id)
    assert data["registradoEnSheets"] is False
    assert data["createdAt"] == data["updatedAt"]

    fetched = client.get(f"/api/pagos/{data['id']}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()["codigoSeguridad"] == "123456"


def test_create_invalid_returns_400(client, propietario):
    headers = login(client, propietario.email)
    response = client.post("/api/pagos", json=pago_payload(monto=-3), headers=headers)
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errors"][0]["field"] == "monto"


def test_duplicate_code_returns_409(client, propietario):
    headers = login(client, propietario.email)
    assert client.post("/api/pagos", json=pago_payload(codigoSeguridad="999999"), headers=headers).status_code == 201
    response = client.post("/api/pagos", json=pago_payload(codigoSeguridad="999999"), headers=headers)
    assert response.status_code == 409


def test_list_pagination(client, propietario):
    headers = login(client, propietario.email)
    for i in range(3):
        client.post("/api/pagos", json=pago_payload(monto=10 + i), headers=headers)

    response = client.get("/api/pagos", params={"page": 2, "limit": 2}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert len(body["pagos"]) == 1
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 3, "totalPages": 2}


def test_list_invalid_query_returns_400(client, propietario):
    headers = login(client, propietario.email)
    response = client.get("/api/pagos", params={"limit": 500}, headers=headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "limit"


def test_list_page_beyond_offset_range_returns_400(client, propietario):
    headers = login(client, propietario.email)
    response = client.get("/api/pagos", params={"page": "10000000000000000000"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "page"


def test_other_owner_gets_404(client, propietario, otro_propietario):
    pago = client.post("/api/pagos", json=pago_payload(), headers=login(client, propietario.email)).json()
    ajeno = login(client, otro_propietario.email)
    assert client.get(f"/api/pagos/{pago['id']}", headers=ajeno).status_code == 404
    assert client.delete(f"/api/pagos/{pago['id']}", headers=ajeno).status_code == 404


def test_update_and_notify(client, propietario):
    headers = login(client, propietario.email)
    pago = client.post("/api/pagos", json=pago_payload(), headers=headers).json()

    response = client.put(f"/api/pagos/{pago['id']}", json={"monto": 200}, headers=headers)
    assert response.status_code == 200
    assert response.json()["monto"] == 200.0
    assert response.json()["nombrePagador"] == "Juan Perez"

    notificado = client.post(f"/api/pagos/{pago['id']}/notificado", headers=headers).json()
    assert notificado["notificadoEmpleados"] is True
    assert notificado["procesadoAt"] is not None


def test_delete_twice(client, propietario):
    headers = login(client, propietario.email)
    pago = client.post("/api/pagos", json=pago_payload(), headers=headers).json()
    assert client.delete(f"/api/pagos/{pago['id']}", headers=headers).status_code == 204
    assert client.delete(f"/api/pagos/{pago['id']}", headers=headers).status_code == 404


def test_stats(client, propietario, otro_propietario, admin):
    duenio = login(client, propietario.email)
    client.post("/api/pagos", json=pago_payload(monto=10), headers=duenio)
    client.post("/api/pagos", json=pago_payload(monto=30), headers=duenio)
    client.post("/api/pagos", json=pago_payload(monto=100), headers=login(client, otro_propietario.email))

    response = client.get("/api/pagos/stats", headers=duenio)
    assert response.status_code == 200
    assert response.json() == {"total": 2, "montoTotal": 40.0, "promedio": 20.0}

    prohibido = client.get(
        "/api/pagos/stats", params={"propietarioId": str(otro_propietario.id)}, headers=duenio
    )
    assert prohibido.status_code == 403

    globales = client.get("/api/pagos/stats", headers=login(client, admin.email)).json()
    assert globales["total"] == 3


def test_stats_empty(client, propietario):
    response = client.get("/api/pagos/stats", headers=login(client, propietario.email))
    assert response.json() == {"total": 0, "montoTotal": 0.0, "promedio": 0.0}


def test_unknown_pago_returns_404(client, propietario):
    response = client.get(f"/api/pagos/{uuid.uuid4()}", headers=login(client, propietario.email))
    assert response.status_code == 404
