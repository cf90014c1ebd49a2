from app.config import settings
from app.models.user import Role
from app.utils.accounts import ensure_bootstrap_admin, get_by_email


def test_bootstrap_admin_created_once(db, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_EMAIL", "root@example.com")
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "rootpass1")

    first = ensure_bootstrap_admin(db)
    second = ensure_bootstrap_admin(db)

    assert first.id == second.id
    assert get_by_email(db, "ROOT@example.com").role == Role.ADMIN.value


def test_bootstrap_skipped_without_credentials(db, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_EMAIL", None)
    assert ensure_bootstrap_admin(db) is None


def test_bootstrap_skips_password_bcrypt_cannot_hash(db, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_EMAIL", "root@example.com")
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", "x" * 73)

    assert ensure_bootstrap_admin(db) is None
    assert get_by_email(db, "root@example.com") is None
