import bcrypt

from designflow.users.model import UserChanges


def _login(client, name, password):
    return client.post("/api/auth/login", json={"name": name, "password": password})


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "ok"
    assert isinstance(resp.get_json()["timestamp"], int)


def test_unknown_route_and_wrong_method(client):
    missing = client.get("/api/does-not-exist")
    wrong = client.delete("/api/health")

    assert missing.status_code == 404
    assert missing.get_json() == {"error": "Não encontrado"}
    assert wrong.status_code == 405
    assert wrong.get_json() == {"error": "Method not allowed"}


def test_login_and_me(client):
    resp = _login(client, "Designer 01 - Davi", "123")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["id"] == "d1"
    assert body["role"] == "DESIGNER"
    assert "password" not in body and "passwordHash" not in body

    assert client.get("/api/auth/me").get_json()["id"] == "d1"
    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_login_failures_are_401(client):
    assert _login(client, "Ninguém", "123").get_json() == {"error": "Usuário não encontrado"}
    wrong = _login(client, "Designer 01 - Davi", "321")
    assert wrong.status_code == 401
    assert wrong.get_json() == {"error": "Senha incorreta"}


def test_change_password_status_codes(client):
    url = "/api/auth/change-password"

    assert client.put(url, json={"userId": "d1"}).status_code == 400
    assert client.put(url, json={"userId": "x", "oldPassword": "1", "newPassword": "2"}).status_code == 404
    assert client.put(url, json={"userId": "d1", "oldPassword": "1", "newPassword": "2"}).status_code == 401
    assert client.put(url, json={"userId": "d1", "oldPassword": "123", "newPassword": "2"}).status_code == 200
    assert _login(client, "Designer 01 - Davi", "2").status_code == 200


def test_create_and_list_demands(client):
    resp = client.post(
        "/api/demands",
        json={
            "userId": "d1",
            "items": [{"artTypeId": "1", "quantity": 2, "variationQuantity": 1, "totalPoints": 1}],
            "totalPoints": 1,
        },
    )

    assert resp.status_code == 200
    demand = resp.get_json()
    assert demand["totalPoints"] == 25
    assert demand["totalQuantity"] == 2
    assert demand["items"][0] == {
        "artTypeId": "1",
        "artTypeLabel": "Arte Única",
        "pointsPerUnit": 10,
        "quantity": 2,
        "variationQuantity": 1,
        "variationPoints": 5,
        "totalPoints": 25,
        "isVariation": False,
    }

    listed = client.get("/api/demands", query_string={"userId": "d1"}).get_json()
    assert [d["id"] for d in listed] == [demand["id"]]

    assert client.delete(f"/api/demands/{demand['id']}").get_json() == {"success": True}
    assert client.get("/api/demands").get_json() == []


def test_demand_errors(client):
    assert client.post("/api/demands", json={"userId": "d1", "items": []}).status_code == 400
    assert client.post("/api/demands", json={"userId": "x", "items": [{"artTypeId": "1", "quantity": 1}]}).status_code == 404
    assert client.delete("/api/demands/nope").status_code == 404
    assert client.get("/api/demands", query_string={"startDate": "abc"}).status_code == 400


def test_unexpected_errors_become_500(client, container, monkeypatch):
    def boom(**_kwargs):
        raise RuntimeError("connection lost")

    monkeypatch.setattr(container.demand_service, "list_demands", boom)

    resp = client.get("/api/demands")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Erro ao buscar demandas"}


def test_work_session_endpoint_is_idempotent_per_day(client):
    first = client.post("/api/work-sessions", json={"userId": "d1"}).get_json()
    second = client.post("/api/work-sessions", json={"userId": "d1"}).get_json()

    assert first == second
    assert len(client.get("/api/work-sessions", query_string={"userId": "d1"}).get_json()) == 1


def test_lesson_progress_endpoint(client):
    lesson = client.post("/api/lessons", json={"title": "Grid", "videoUrl": "https://v/1"}).get_json()
    assert lesson["orderIndex"] == 0

    for _ in range(2):
        resp = client.post("/api/lesson-progress", json={"lessonId": lesson["id"], "designerId": "d1"})
        assert resp.status_code == 200

    progress = client.get("/api/lesson-progress/d1").get_json()
    assert len(progress) == 1
    assert progress[0]["viewed"] is True


def test_feedback_flow(client):
    created = client.post(
        "/api/feedbacks",
        json={"designerId": "d1", "designerName": "Davi", "adminName": "Administrador", "imageUrls": [], "comment": "Ok"},
    ).get_json()

    assert client.put(f"/api/feedbacks/{created['id']}/view").status_code == 200
    listed = client.get("/api/feedbacks", query_string={"designerId": "d1"}).get_json()
    assert listed[0]["viewed"] is True
    assert "viewedAt" in listed[0]
    assert client.delete(f"/api/feedbacks/{created['id']}").status_code == 200
    assert client.delete(f"/api/feedbacks/{created['id']}").status_code == 404


def test_settings_empty_object_when_row_missing(client, repos):
    repos.settings.settings = None

    assert client.get("/api/settings").get_json() == {}

    assert client.put("/api/settings", json={"variationPoints": 6}).status_code == 200
    assert client.get("/api/settings").get_json()["variationPoints"] == 6


def test_art_type_routes(client):
    created = client.post("/api/art-types", json={"label": "Logo", "points": 80}).get_json()
    assert created["order"] == 3
    assert created["isVariation"] is False

    order = [{"id": created["id"], "order": 0}, {"id": "1", "order": 1}]
    assert client.put("/api/art-types/reorder", json={"artTypes": order}).status_code == 200
    assert client.get("/api/art-types").get_json()[0]["id"] == created["id"]
    assert client.put("/api/art-types/reorder", json={"artTypes": "nope"}).status_code == 400


def test_user_delete_soft_and_cascade(client, repos):
    assert client.delete("/api/users/d1").status_code == 200
    assert repos.users.get_by_id("d1").active is False

    assert client.delete("/api/users/d2", query_string={"cascade": "true"}).status_code == 200
    assert repos.users.get_by_id("d2") is None


def test_auth_required_guards_admin_routes(app, client):
    app.config["AUTH_REQUIRED"] = True
    payload = {"label": "Logo", "points": 80}

    assert client.post("/api/art-types", json=payload).status_code == 401

    _login(client, "Designer 01 - Davi", "123")
    assert client.post("/api/art-types", json=payload).status_code == 403

    _login(client, "Administrador", "admin")
    assert client.post("/api/art-types", json=payload).status_code == 200


def test_reports_endpoints(client):
    client.post("/api/work-sessions", json={"userId": "d1"})
    client.post("/api/demands", json={"userId": "d1", "items": [{"artTypeId": "3", "quantity": 1}]})

    dashboard = client.get("/api/reports/dashboard", query_string={"period": "today", "designerId": "all"}).get_json()
    assert dashboard["totalPoints"] == 40
    assert dashboard["designers"] == [{"id": "d1", "name": "Davi", "points": 40, "arts": 1}]

    history = client.get("/api/reports/history").get_json()
    assert history[0]["userName"] == "Designer 01 - Davi"
    assert history[0]["totalPoints"] == 40

    csv_resp = client.get("/api/reports/history.csv")
    assert csv_resp.status_code == 200
    assert csv_resp.mimetype == "text/csv"
    assert csv_resp.data.startswith(b"\xef\xbb\xbf")
    assert "attachment; filename=historico_20260310_20260310.csv" == csv_resp.headers["Content-Disposition"]


def test_cors_headers_on_api_routes(client):
    resp = client.get("/api/health", headers={"Origin": "http://localhost:5173"})

    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"


def test_cors_preflight_is_answered(client):
    resp = client.options(
        "/api/demands",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert resp.status_code == 200
    assert "POST" in resp.headers["Access-Control-Allow-Methods"]
    assert resp.headers["Access-Control-Max-Age"] == "600"


def test_login_with_bcrypt_hash_from_previous_backend(client, repos):
    legacy = bcrypt.hashpw(b"123", bcrypt.gensalt(10)).decode("utf-8")
    repos.users.update_user("d1", UserChanges(password_hash=legacy))

    assert _login(client, "Designer 01 - Davi", "123").status_code == 200
    assert _login(client, "Designer 01 - Davi", "123").status_code == 200


def test_non_text_fields_are_400_not_500(client):
    assert _login(client, 123, "123").status_code == 400
    assert client.put("/api/users/d1", json={"password": 123}).status_code == 400
