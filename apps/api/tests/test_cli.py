"""Tests for the admin CLI."""
from click.testing import CliRunner

from surrogacy_admin.cli import cli
from surrogacy_admin.core.security import decode_session_token
from surrogacy_admin.db.models import Journey, Match, SurrogacyCase, User


def test_create_staff_and_issue_token(db):
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["create-staff", "--email", "Ops@Agency.com", "--first-name", "Pat",
         "--last-name", "Lee", "--role", "admin"],
    )
    assert result.exit_code == 0, result.output
    assert "Created Admin: ops@agency.com" in result.output

    result = runner.invoke(cli, ["create-staff", "--email", "ops@agency.com",
                                 "--first-name", "Pat", "--last-name", "Lee"])
    assert "already exists" in result.output

    result = runner.invoke(cli, ["issue-token", "--email", "ops@agency.com"])
    assert result.exit_code == 0
    payload = decode_session_token(result.output.strip())
    user = db.query(User).filter(User.email == "ops@agency.com").one()
    assert payload["sub"] == str(user.id)
    assert payload["token_version"] == 1


def test_issue_token_refuses_participant(db, surrogate):
    result = CliRunner().invoke(cli, ["issue-token", "--email", surrogate.email])
    assert "not a staff account" in result.output


def test_revoke_sessions(db, staff_user):
    result = CliRunner().invoke(cli, ["revoke-sessions", "--email", staff_user.email])
    assert result.exit_code == 0
    assert "Token version: 1 → 2" in result.output

    db.expire_all()
    assert db.get(User, staff_user.id).token_version == 2


def test_seed_demo_is_idempotent(db):
    runner = CliRunner()
    first = runner.invoke(cli, ["seed-demo"])
    assert first.exit_code == 0, first.output
    assert "6 new" in first.output

    second = runner.invoke(cli, ["seed-demo"])
    assert "0 new" in second.output

    db.expire_all()
    assert db.query(Match).count() == 2
    assert db.query(SurrogacyCase).count() == 2
    assert db.query(Journey).count() == 2
    assert all(m.status == "Accepted" and m.matched_at for m in db.query(Match))
