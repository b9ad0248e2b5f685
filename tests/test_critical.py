"""
Critical Integration Tests for Reelfolio
========================================

Focused tests covering the integration points most likely to break:
startup validation, blueprint registration, cookie and CORS config, health
and the portfolio page.

Run with: pytest tests/ -v
"""

from datetime import datetime, timedelta
from unittest.mock import patch

import mongomock
import pytest
from flask import Flask

from reelfolio import Reelfolio, create_app
from reelfolio.core.config import validate_config
from reelfolio.core.errors import ConfigError

from conftest import TEST_CONFIG, ADMIN_PASSWORD


# ---------------------------------------------------------------------------
# 1. Framework initialisation
# ---------------------------------------------------------------------------

def test_framework_initialisation():
    """Reelfolio(app) boots and stores itself on the app."""
    app = Flask(__name__)
    reelfolio = Reelfolio(app, dict(TEST_CONFIG), mongo_client=mongomock.MongoClient())

    assert app.extensions["reelfolio"] is reelfolio
    assert "reelfolio_db" in app.extensions
    assert "reelfolio_sessions" in app.extensions


EXPECTED_MODULES = ["admin", "projects", "ops", "site"]


def test_all_blueprints_registered(app):
    registered = app.extensions["reelfolio"].get_registered_modules()
    assert sorted(registered) == sorted(EXPECTED_MODULES)

    rules = {rule.rule for rule in app.url_map.iter_rules()}
    for rule in ("/api/projects", "/api/projects/<project_id>", "/api/admin/login",
                 "/api/admin/status", "/api/admin/logout", "/health", "/"):
        assert rule in rules, f"{rule} missing from url map"


def test_api_only_deployment():
    """The site and ops modules can be switched off for a separate frontend."""
    app = create_app(
        dict(TEST_CONFIG, features={"site": False, "ops": False}),
        mongo_client=mongomock.MongoClient(),
    )
    assert app.extensions["reelfolio"].get_registered_modules() == ["admin", "projects"]
    assert app.test_client().get("/").status_code == 404


def test_startup_prunes_expired_logs():
    client = mongomock.MongoClient()
    logs = client["reelfolio-test"]["app_logs"]
    logs.insert_one({"timestamp": (datetime.now() - timedelta(days=45)).isoformat(), "source": "old"})
    logs.insert_one({"timestamp": datetime.now().isoformat(), "source": "recent"})

    create_app(dict(TEST_CONFIG), mongo_client=client)

    sources = {entry["source"] for entry in logs.find()}
    assert "old" not in sources
    assert "recent" in sources


# ---------------------------------------------------------------------------
# 2. Required configuration
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("missing", ["MONGO_URI", "SECRET_KEY", "ADMIN_PASSWORD", "CORS_ORIGINS"])
def test_missing_required_setting_is_fatal(missing):
    config = dict(TEST_CONFIG)
    config[missing] = ""

    with pytest.raises(ConfigError) as exc_info:
        create_app(config, mongo_client=mongomock.MongoClient())

    assert missing in exc_info.value.missing
    assert "FATAL ERROR" in exc_info.value.message


def test_media_bucket_settings_required():
    config = dict(TEST_CONFIG, DO_SPACES_KEY="", DO_SPACES_SECRET=None)
    missing = validate_config(config)
    assert "DO_SPACES_KEY" in missing
    assert "DO_SPACES_SECRET" in missing
    assert "DO_SPACES_NAME" not in missing


def test_unknown_media_policy_rejected():
    missing = validate_config(dict(TEST_CONFIG, MEDIA_INPUT_POLICY="sometimes"))
    assert any(m.startswith("MEDIA_INPUT_POLICY") for m in missing)


def test_admin_password_is_trimmed(make_app):
    app = make_app(ADMIN_PASSWORD=f"  {ADMIN_PASSWORD}\n")
    assert app.config["ADMIN_PASSWORD"] == ADMIN_PASSWORD


def test_cors_origins_parsed_to_list(app):
    assert app.config["CORS_ORIGINS"] == ["http://localhost:5173", "http://localhost:3000"]


# ---------------------------------------------------------------------------
# 3. Session cookie
# ---------------------------------------------------------------------------

def test_session_cookie_development(app):
    assert app.config["SESSION_COOKIE_HTTPONLY"] is True
    assert app.config["SESSION_COOKIE_SECURE"] is False
    assert app.config["SESSION_COOKIE_SAMESITE"] == "Lax"
    assert app.config["PERMANENT_SESSION_LIFETIME"] == timedelta(hours=24)
    assert app.config["SESSION_REFRESH_EACH_REQUEST"] is False


def test_session_cookie_production(make_app):
    app = make_app(IS_PRODUCTION=True)
    assert app.config["SESSION_COOKIE_SECURE"] is True
    assert app.config["SESSION_COOKIE_SAMESITE"] == "None"


def test_login_cookie_flags(client):
    response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    cookie = response.headers.get("Set-Cookie", "")
    assert "HttpOnly" in cookie
    assert "SameSite=Lax" in cookie
    assert "Max-Age=86400" in cookie or "Expires=" in cookie


# ---------------------------------------------------------------------------
# 4. CORS allow-list
# ---------------------------------------------------------------------------

def test_cors_allowed_origin(client):
    response = client.get("/api/projects", headers={"Origin": "http://localhost:5173"})
    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == "http://localhost:5173"
    assert response.headers.get("Access-Control-Allow-Credentials") == "true"


def test_cors_disallowed_origin(client):
    response = client.get("/api/projects", headers={"Origin": "https://evil.example.com"})
    assert "Access-Control-Allow-Origin" not in response.headers


def test_request_without_origin_is_served(client):
    response = client.get("/api/projects")
    assert response.status_code == 200
    assert response.get_json() == []


# ---------------------------------------------------------------------------
# 5. Health endpoint
# ---------------------------------------------------------------------------

def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "ok"
    assert data["checks"]["database"]["status"] == "ok"
    assert "uptime" in data["checks"]


def test_health_reports_unreachable_store(app, client):
    db = app.extensions["reelfolio_db"]
    with patch.object(db, "ping", return_value=(False, "connection refused")):
        response = client.get("/health")

    assert response.status_code == 503
    data = response.get_json()
    assert data["status"] == "critical"
    assert "connection refused" not in response.get_data(as_text=True)


# ---------------------------------------------------------------------------
# 6. Portfolio page
# ---------------------------------------------------------------------------

def test_homepage_renders_sections(client):
    response = client.get("/")
    assert response.status_code == 200
    html = response.get_data(as_text=True)
    for section in ("home", "showreel", "projects", "about", "contact"):
        assert f'id="{section}"' in html
    assert "Lucy Kadii" in html
    assert "js/app.js" in html
    assert "js/admin.js" in html


def test_homepage_uses_configured_identity(make_app):
    app = make_app(SITE_OWNER="Jane Doe", SITE_CONTACT_EMAIL="jane@example.com")
    html = app.test_client().get("/").get_data(as_text=True)
    assert "JANE DOE" in html
    assert "mailto:jane@example.com" in html


def test_site_assets_served(client):
    for path in ("/site/static/js/app.js", "/site/static/js/admin.js", "/site/static/css/site.css"):
        response = client.get(path)
        assert response.status_code == 200, path
        response.close()
