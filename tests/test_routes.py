import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from app.main import app
from app.dependencies import get_content_service, get_page_service
from app.services import ContentService, KeyValueStore, PageService

def create_template(client, headers, template_id=1, structure="<div>{{content}}</div>"):
    return client.post("/template", json={"id": template_id, "structure": structure}, headers=headers)

def create_content(client, headers, **fields):
    body = {"path": "x", "templateId": 1, "title": "T", "content": "C"}
    body.update(fields)
    return client.post("/", json=body, headers=headers)

# --- Welcome page ---

def test_homepage(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Welcome to GoGoKodo" in response.text
    assert "Visit /{path} to see content with templates" in response.text

# --- Dynamic render ---

def test_round_trip_render(client, admin_headers):
    assert create_template(client, admin_headers).status_code == 201
    assert create_content(client, admin_headers).status_code == 201

    response = client.get("/x")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "<div>C</div>" in response.text
    assert "<title>T</title>" in response.text

def test_render_with_style_and_script(client, admin_headers):
    create_template(client, admin_headers, template_id="shell", structure='<div class="test-template">{{content}}</div>')
    create_content(
        client, admin_headers,
        path="test", templateId="shell", title="Test Page", content="Test content",
        style="body { margin: 0; }", script="init();",
    )

    response = client.get("/test")
    assert response.status_code == 200
    assert "Test Page" in response.text
    assert '<div class="test-template">Test content</div>' in response.text
    assert "<style>body { margin: 0; }</style>" in response.text
    assert "init();" in response.text

def test_render_unknown_path_is_404(client):
    response = client.get("/non-existent")
    assert response.status_code == 404
    assert response.text == "Not Found"
    assert "text/plain" in response.headers["content-type"]

def test_render_missing_template_is_broken_reference(client, admin_headers):
    create_content(client, admin_headers, path="orphan", templateId=404)

    response = client.get("/orphan")
    assert response.status_code == 500
    assert response.text == "Broken template reference"

def test_render_does_not_resolve_template_without_content(client, test_settings):
    content_service = MagicMock()
    content_service.get_content.return_value = None
    template_service = MagicMock()

    app.dependency_overrides[get_page_service] = lambda: PageService(content_service, template_service, test_settings)

    response = client.get("/missing")
    assert response.status_code == 404
    content_service.get_content.assert_called_once_with("/missing")
    template_service.get_template.assert_not_called()

def test_template_overwrite_uses_latest_structure(client, admin_headers):
    create_template(client, admin_headers, structure="<old>{{content}}</old>")
    create_content(client, admin_headers)
    assert "<old>C</old>" in client.get("/x").text

    create_template(client, admin_headers, structure="<new>{{content}}</new>")
    response = client.get("/x")
    assert "<new>C</new>" in response.text
    assert "<old>" not in response.text

def test_content_written_with_leading_slash_renders(client, admin_headers):
    create_template(client, admin_headers)
    create_content(client, admin_headers, path="/about", content="About us")

    response = client.get("/about")
    assert response.status_code == 200
    assert "<div>About us</div>" in response.text

def test_multi_segment_path_is_404(client, admin_headers):
    create_template(client, admin_headers)
    create_content(client, admin_headers)

    response = client.get("/x/y")
    assert response.status_code == 404
    assert response.text == "Not Found"

def test_unsupported_method_is_404(client):
    response = client.delete("/x")
    assert response.status_code == 404
    assert response.text == "Not Found"

def test_trailing_slash_is_404_not_redirect(client, admin_headers):
    create_template(client, admin_headers)
    create_content(client, admin_headers)

    response = client.get("/x/", follow_redirects=False)
    assert response.status_code == 404
    assert response.text == "Not Found"

    response = client.post("/template/", json={"id": 2, "structure": "{{content}}"}, headers=admin_headers, follow_redirects=False)
    assert response.status_code == 404
    assert response.text == "Not Found"
    assert client.get("/template/2").status_code == 404

# --- Templates API ---

def test_create_template_requires_admin(client):
    response = create_template(client, headers={})
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized - Invalid admin token"}

    assert client.get("/template/1").status_code == 404

def test_create_template_rejects_wrong_token(client, admin_headers):
    response = create_template(client, headers={"Authorization": "wrong"})
    assert response.status_code == 401
    assert client.get("/template/1").status_code == 404

def test_admin_token_is_compared_verbatim(client, admin_headers):
    bearer = {"Authorization": f"Bearer {admin_headers['Authorization']}"}
    assert create_template(client, headers=bearer).status_code == 401

def test_create_template_missing_structure(client, admin_headers):
    response = client.post("/template", json={"id": 1}, headers=admin_headers)
    assert response.status_code == 400
    assert "structure" in response.json()["error"]

    assert client.get("/template/1").status_code == 404

def test_create_template_empty_structure(client, admin_headers):
    response = create_template(client, admin_headers, structure="")
    assert response.status_code == 400

def test_create_template_invalid_json(client, admin_headers):
    response = client.post(
        "/template",
        content="{not json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}

def test_admin_check_runs_before_body_parsing(client):
    for path in ("/template", "/"):
        response = client.post(path, content="{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized - Invalid admin token"}

        response = client.post(path, json={"unexpected": True}, headers={"Authorization": "wrong"})
        assert response.status_code == 401

def test_create_template_wrong_type_is_invalid_not_missing(client, admin_headers):
    response = client.post("/template", json={"id": 1, "structure": 123}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid fields: structure"}

def test_create_template_non_object_body(client, admin_headers):
    response = client.post("/template", json=["id", "structure"], headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body"}

def test_create_and_get_template(client, admin_headers):
    response = client.post(
        "/template",
        json={"id": 42, "structure": "<p>{{content}}</p>", "templateId": 9},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json() == {"message": "Template created successfully"}

    response = client.get("/template/42")
    assert response.status_code == 200
    assert response.json() == {"structure": "<p>{{content}}</p>"}

def test_get_missing_template(client):
    response = client.get("/template/unknown")
    assert response.status_code == 404
    assert response.json() == {"error": "Template not found"}

# --- Content API ---

def test_create_content_requires_admin(client):
    response = create_content(client, headers={"Authorization": ""})
    assert response.status_code == 401
    assert client.get("/content/x").status_code == 404

def test_create_content_missing_fields(client, admin_headers):
    response = client.post("/", json={"path": "x", "content": "C"}, headers=admin_headers)
    assert response.status_code == 400
    error = response.json()["error"]
    assert "templateId" in error
    assert "title" in error
    assert error.startswith("Missing required fields:")

    assert client.get("/content/x").status_code == 404

def test_create_and_get_content_with_defaults(client, admin_headers):
    response = create_content(client, admin_headers)
    assert response.status_code == 201
    assert response.json() == {"message": "Content created successfully"}

    response = client.get("/content/x")
    assert response.status_code == 200
    assert response.json() == {
        "templateId": 1,
        "title": "T",
        "content": "C",
        "style": "",
        "script": "",
    }

def test_get_missing_content(client):
    response = client.get("/content/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "Content not found"}

def test_writes_rejected_when_no_admin_token_configured(client, test_settings):
    test_settings.ADMIN_TOKEN = ""
    response = create_template(client, headers={"Authorization": ""})
    assert response.status_code == 401

# --- Cross-cutting ---

def test_cors_headers(client):
    response = client.get("/", headers={"Origin": "https://example.com"})
    assert response.headers["access-control-allow-origin"] == "*"

def test_cors_preflight(client):
    response = client.options(
        "/template",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Authorization, Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"

def test_store_failure_returns_generic_500(client):
    db = MagicMock()
    db.get.side_effect = OperationalError("SELECT", {}, Exception("no such table: kventry"))
    app.dependency_overrides[get_content_service] = lambda: ContentService(KeyValueStore(db, "CONTENT"))

    response = client.get("/content/x")
    assert response.status_code == 500
    assert response.json() == {"error": "Storage backend unavailable"}
    assert "kventry" not in response.text

def test_unhandled_error_hides_details(client):
    service = MagicMock()
    service.render_page.side_effect = RuntimeError("secret internals")
    app.dependency_overrides[get_page_service] = lambda: service

    response = client.get("/x", headers={"Origin": "https://example.com"})
    assert response.status_code == 500
    assert response.text == "Internal Server Error"
    assert response.headers["access-control-allow-origin"] == "*"
