"""
Smoke tests - the package imports, the page template compiles and the
routes are mounted where the page links to them.
Run: pytest tests/test_smoke.py -v
"""
from user_management.api.v1.user_page_controller import templates
from user_management.main import app


def test_settings_load():
    from user_management.core.config import get_settings

    settings = get_settings()
    assert hasattr(settings, "user_api_base_url")
    assert settings.notice_auto_clear_seconds > 0


def test_page_template_compiles():
    template = templates.get_template("user_page.html")
    assert template.name == "user_page.html"
    assert "quote_id" in templates.filters


def test_user_routes_are_mounted():
    paths = {route.path for route in app.routes}
    assert "/users/" in paths
    assert "/users/state" in paths
    assert "/users/{user_id:path}/delete" in paths
