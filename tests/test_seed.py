"""Demo seed script tests."""

import importlib.util
from pathlib import Path

import pytest

from src.config import get_settings
from src.models.enums import Role
from src.models.user import User

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "seed_demo_data.py"


@pytest.fixture
def seed_module(db, monkeypatch):
    spec = importlib.util.spec_from_file_location("seed_demo_data", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(
        module, "DATABASE_URL", db.get_bind().url.render_as_string(hide_password=False)
    )
    return module


def test_seed_provisions_admin_with_configured_rounds(seed_module, db):
    """Seeded hashes use the same bcrypt cost as the running app."""
    seed_module.seed_demo_data()

    admin = db.query(User).filter(User.email == seed_module.ADMIN_EMAIL).one()
    assert admin.role == Role.ADMIN.value
    rounds = get_settings().bcrypt_rounds
    assert admin.password_hash.startswith(f"$2b${rounds:02d}$")
