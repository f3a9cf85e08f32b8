from app.core.rate_limit import LIMITE_GENERAL, LIMITES_POR_CODIGO


def test_general_limit_after_100_requests(client):
    for _ in range(100):
        assert client.get("/api/health").status_code == 200

    response = client.get("/api/health")
    assert response.status_code == 429
    assert response.json() == {"error": LIMITE_GENERAL.mensaje, "code": "RATE_LIMIT_EXCEEDED"}
    assert "Retry-After" in response.headers


def test_accepted_responses_carry_limit_headers(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.headers["X-RateLimit-Limit"] == "100"
    assert response.headers["X-RateLimit-Remaining"] == "99"


def test_register_limit_is_three_per_hour(client, roles):
    for i in range(3):
        response = client.post(
            "/auth/register", json={"email": f"nuevo{i}@example.com", "password": "clave-segura-123"}
        )
        assert response.status_code == 201, response.text

    response = client.post(
        "/auth/register", json={"email": "nuevo9@example.com", "password": "clave-segura-123"}
    )
    assert response.status_code == 429
    assert response.json()["code"] == "REGISTER_RATE_LIMIT_EXCEEDED"


def test_otp_limit_is_three_per_window(client):
    for _ in range(3):
        response = client.post("/auth/forgot-password", json={"email": "nadie@example.com"})
        assert response.status_code == 202

    response = client.post("/auth/forgot-password", json={"email": "nadie@example.com"})
    assert response.status_code == 429
    assert response.json()["code"] == "OTP_RATE_LIMIT_EXCEEDED"


def test_login_limit(client, propietario):
    for _ in range(50):
        client.post("/auth/login", data={"username": propietario.email, "password": "incorrecta"})

    response = client.post("/auth/login", data={"username": propietario.email, "password": "incorrecta"})
    assert response.status_code == 429
    assert response.json()["code"] == "AUTH_RATE_LIMIT_EXCEEDED"


def test_limits_are_independent(client):
    for _ in range(3):
        client.post("/auth/forgot-password", json={"email": "nadie@example.com"})
    assert client.get("/api/health").status_code == 200


def test_codes_table():
    assert set(LIMITES_POR_CODIGO) == {
        "RATE_LIMIT_EXCEEDED",
        "AUTH_RATE_LIMIT_EXCEEDED",
        "REGISTER_RATE_LIMIT_EXCEEDED",
        "OTP_RATE_LIMIT_EXCEEDED",
    }


def test_general_limit_is_shared_across_routes(client):
    for _ in range(100):
        assert client.get("/api/health").status_code == 200

    response = client.get("/api/pagos")
    assert response.status_code == 429
    assert response.json()["code"] == "RATE_LIMIT_EXCEEDED"


def test_auth_routes_also_count_toward_general_limit(client, propietario):
    for _ in range(100):
        client.get("/api/health")

    response = client.post("/auth/login", data={"username": propietario.email, "password": "incorrecta"})
    assert response.status_code == 429
    assert response.json()["code"] == "RATE_LIMIT_EXCEEDED"


def test_forgot_password_counts_toward_auth_limit(client, propietario):
    for _ in range(47):
        client.post("/auth/login", data={"username": propietario.email, "password": "incorrecta"})
    for _ in range(3):
        assert client.post("/auth/forgot-password", json={"email": "nadie@example.com"}).status_code == 202

    response = client.post("/auth/login", data={"username": propietario.email, "password": "incorrecta"})
    assert response.status_code == 429
    assert response.json()["code"] == "AUTH_RATE_LIMIT_EXCEEDED"
