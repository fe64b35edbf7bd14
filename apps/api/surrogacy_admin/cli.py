"""CLI tools for surrogacy admin operations."""

import logging

import click
from sqlalchemy.exc import SQLAlchemyError

from surrogacy_admin.core.logging_config import configure_logging
from surrogacy_admin.core.security import create_session_token
from surrogacy_admin.db.enums import MatchStatus, STAFF_ROLES, UserRole
from surrogacy_admin.db.models import Journey, Match, SurrogacyCase, User
from surrogacy_admin.db.session import SessionLocal
from surrogacy_admin.schemas.case import CaseCreate
from surrogacy_admin.schemas.journey import JourneyCreate
from surrogacy_admin.schemas.participant import ParticipantCreate
from surrogacy_admin.services import (
    journey_service,
    match_service,
    milestone_service,
    participant_service,
)
from surrogacy_admin.utils.normalization import normalize_email, normalize_name

logger = logging.getLogger(__name__)

STAFF_ROLE_CHOICES = {"admin": UserRole.ADMIN, "staff": UserRole.AGENCY_STAFF}

DEMO_PARENTS = [
    {"email": "demo.parent1@example.com", "parent1": {"name": "Alex Rivera"}},
    {"email": "demo.parent2@example.com", "parent1": {"name": "Sam Chen"}},
]
DEMO_SURROGATES = [
    {"email": "demo.gc1@example.com", "form_data": {"firstName": "Jordan", "lastName": "Hale"}},
    {"email": "demo.gc2@example.com", "form_data": {"firstName": "Taylor", "lastName": "Brooks"}},
]


@click.group()
def cli():
    """Surrogacy admin CLI tools."""
    configure_logging()


@cli.command()
@click.option("--email", required=True, help="Staff email address")
@click.option("--first-name", required=True)
@click.option("--last-name", required=True)
@click.option(
    "--role",
    type=click.Choice(sorted(STAFF_ROLE_CHOICES)),
    default="staff",
    show_default=True,
)
def create_staff(email: str, first_name: str, last_name: str, role: str):
    """
    Create a staff account.

    Example:
        python -m surrogacy_admin.cli create-staff --email ops@agency.com --first-name Pat --last-name Lee --role admin
    """
    db = SessionLocal()
    try:
        email = normalize_email(email)
        if db.query(User).filter(User.email == email).first():
            click.echo(f"❌ User already exists: {email}")
            return

        user = User(
            email=email,
            first_name=normalize_name(first_name),
            last_name=normalize_name(last_name),
            role=STAFF_ROLE_CHOICES[role].value,
        )
        db.add(user)
        db.commit()
        click.echo(f"✓ Created {user.role}: {email}")
        click.echo(f"  ID: {user.id}")
    except SQLAlchemyError as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


@cli.command()
@click.option("--email", required=True, help="Staff email to issue a session token for")
def issue_token(email: str):
    """
    Print a session token for a staff user (set it as the sa_session cookie).

    Example:
        python -m surrogacy_admin.cli issue-token --email ops@agency.com
    """
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == normalize_email(email)).first()
        if not user:
            click.echo(f"❌ User not found: {email}")
            return
        if not UserRole.has_value(user.role) or UserRole(user.role) not in STAFF_ROLES:
            click.echo(f"❌ {email} is not a staff account")
            return
        if not user.is_active:
            click.echo(f"❌ {email} is disabled")
            return
        click.echo(create_session_token(user.id, user.role, user.token_version))
    finally:
        db.close()


@cli.command()
@click.option("--email", required=True, help="User email to revoke sessions for")
def revoke_sessions(email: str):
    """
    Revoke all sessions for a user by bumping their token_version.

    Example:
        python -m surrogacy_admin.cli revoke-sessions --email ops@agency.com
    """
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == normalize_email(email)).first()
        if not user:
            click.echo(f"❌ User not found: {email}")
            return

        old_version = user.token_version
        user.token_version += 1
        db.commit()
        click.echo(f"✓ Revoked all sessions for {email}")
        click.echo(f"  Token version: {old_version} → {user.token_version}")
    except SQLAlchemyError as e:
        db.rollback()
        click.echo(f"❌ Error: {e}")
    finally:
        db.close()


def _ensure_participant(db, role: UserRole, record: dict) -> User:
    existing = db.query(User).filter(User.email == record["email"]).first()
    if existing:
        return existing
    return participant_service.create_participant(db, role, ParticipantCreate(**record))


@cli.command()
def seed_demo():
    """
    Provision demo participants, a match, a case and a journey.

    Idempotent on participant email. A record that fails is logged and the
    run continues.
    """
    db = SessionLocal()
    created = 0
    try:
        parents, surrogates = [], []
        for role, records, bucket in (
            (UserRole.INTENDED_PARENT, DEMO_PARENTS, parents),
            (UserRole.SURROGATE, DEMO_SURROGATES, surrogates),
        ):
            for record in records:
                try:
                    bucket.append(_ensure_participant(db, role, record))
                except (ValueError, SQLAlchemyError):
                    db.rollback()
                    logger.exception("Seeding %s failed", role.value)

        for parent, surrogate in zip(parents, surrogates):
            try:
                match = db.query(Match).filter(Match.parent_id == parent.id).first()
                if not match:
                    match = match_service.create_match(
                        db,
                        parent_id=parent.id,
                        surrogate_id=surrogate.id,
                        status=MatchStatus.ACCEPTED,
                    )
                    created += 1
                if not db.query(SurrogacyCase).filter(SurrogacyCase.parent_id == parent.id).first():
                    milestone_service.create_case(
                        db, CaseCreate(parent_id=parent.id, surrogate_id=surrogate.id)
                    )
                    created += 1
                if not db.query(Journey).filter(Journey.match_id == match.id).first():
                    journey_service.create_journey(db, JourneyCreate(match_id=match.id))
                    created += 1
            except (ValueError, SQLAlchemyError):
                db.rollback()
                logger.exception("Seeding match for parent %s failed", parent.id)

        click.echo(f"✓ Demo data ready ({created} new matches/cases/journeys)")
    finally:
        db.close()


if __name__ == "__main__":
    cli()
