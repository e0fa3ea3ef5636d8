"""Maintenance commands, run with ``flask --app health_tracker <command>``."""
import random
from datetime import datetime, timedelta

import click
from sqlalchemy import func

from health_tracker.errors import NotFound
from health_tracker.extensions import db
from health_tracker.models import User, HealthRecord, VitalSign
from health_tracker.services import users as user_service

DEMO_PASSWORD = "password123"
DEMO_USERS = (
    ("john_doe", "john@example.com"),
    ("jane_smith", "jane@example.com"),
    ("mike_test", "mike@example.com"),
)


def clear_database():
    # Children first so the counts are reported per table
    vitals = VitalSign.query.delete()
    records = HealthRecord.query.delete()
    users = User.query.delete()
    db.session.commit()
    return vitals, records, users


def seed_database(days=30, rng=None):
    rng = rng or random.Random()
    users = []
    for username, email in DEMO_USERS:
        user = User(username=username, email=email)
        user.set_password(DEMO_PASSWORD)
        db.session.add(user)
        users.append(user)
    db.session.flush()

    today = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    for i in range(days):
        day = today - timedelta(days=i)
        record = HealthRecord(
            user_id=users[0].id,
            date=day,
            weight=round(70 + rng.random() * 10, 1),
            steps=rng.randint(5000, 15000),
            sleep_hours=round(6 + rng.random() * 3, 1),
            notes="Feeling great today!" if i % 5 == 0 else None,
        )
        record.vital_signs = [
            VitalSign(
                timestamp=day + timedelta(hours=8),
                time_of_day="morning",
                heart_rate=rng.randint(60, 80),
                blood_pressure_systolic=rng.randint(110, 130),
                blood_pressure_diastolic=rng.randint(70, 85),
                temperature=round(36.5 + rng.random() * 0.5, 1),
                oxygen_saturation=rng.randint(95, 99),
            ),
            VitalSign(
                timestamp=day + timedelta(hours=20),
                time_of_day="evening",
                heart_rate=rng.randint(65, 90),
                blood_pressure_systolic=rng.randint(115, 140),
                blood_pressure_diastolic=rng.randint(75, 95),
                temperature=round(36.8 + rng.random() * 0.5, 1),
                oxygen_saturation=rng.randint(96, 100),
            ),
        ]
        db.session.add(record)
    db.session.commit()
    return users


def _fmt(value, digits):
    return "n/a" if value is None else f"{value:.{digits}f}"


def register_commands(app):
    @app.cli.command("seed")
    @click.option("--days", default=30, show_default=True, help="Days of records for the first user.")
    def seed_command(days):
        """Clear the database and fill it with demo data."""
        clear_database()
        users = seed_database(days=days)
        click.echo(f"Created {len(users)} users")
        click.echo(f"Created {days} health records")
        click.echo(f"Created {days * 2} vital signs")
        click.echo(f"Demo password for all users: {DEMO_PASSWORD}")

    @app.cli.command("clear-db")
    def clear_db_command():
        """Delete all users, records and vital signs."""
        vitals, records, users = clear_database()
        click.echo(f"Deleted {vitals} vital signs")
        click.echo(f"Deleted {records} health records")
        click.echo(f"Deleted {users} users")

    @app.cli.command("db-stats")
    def db_stats_command():
        """Show totals, top users and global averages."""
        total_users = User.query.count()
        total_records = HealthRecord.query.count()

        top_users = (
            db.session.query(User.username, func.count(HealthRecord.id).label("records"))
            .outerjoin(HealthRecord, HealthRecord.user_id == User.id)
            .group_by(User.id, User.username)
            .order_by(func.count(HealthRecord.id).desc())
            .limit(5)
            .all()
        )
        daily = db.session.query(
            func.avg(HealthRecord.weight),
            func.avg(HealthRecord.steps),
            func.avg(HealthRecord.sleep_hours),
            func.min(HealthRecord.steps),
            func.max(HealthRecord.steps),
        ).one()
        vitals = db.session.query(
            func.avg(VitalSign.heart_rate),
            func.avg(VitalSign.blood_pressure_systolic),
            func.avg(VitalSign.blood_pressure_diastolic),
            func.avg(VitalSign.temperature),
            func.avg(VitalSign.oxygen_saturation),
        ).one()

        click.echo("=" * 50)
        click.echo("DATABASE STATISTICS")
        click.echo("=" * 50)
        click.echo(f"Total Users: {total_users}")
        click.echo(f"Total Health Records: {total_records}")
        click.echo("\nTop 5 Users by Records:")
        for i, (username, count) in enumerate(top_users, start=1):
            click.echo(f"  {i}. {username} - {count} records")
        click.echo("\nGlobal Averages (Daily Records):")
        click.echo(f"  Weight: {_fmt(daily[0], 2)} kg")
        click.echo(f"  Steps: {_fmt(daily[1], 0)}")
        click.echo(f"  Sleep: {_fmt(daily[2], 2)} hours")
        click.echo("\nGlobal Averages (Vital Signs):")
        click.echo(f"  Heart Rate: {_fmt(vitals[0], 0)} bpm")
        click.echo(f"  BP Systolic: {_fmt(vitals[1], 0)} mmHg")
        click.echo(f"  BP Diastolic: {_fmt(vitals[2], 0)} mmHg")
        click.echo(f"  Temp: {_fmt(vitals[3], 1)} °C")
        click.echo(f"  SpO2: {_fmt(vitals[4], 0)} %")
        click.echo("\nRecords:")
        click.echo(f"  Max Steps: {daily[4]}")
        click.echo(f"  Min Steps: {daily[3]}")
        click.echo("=" * 50)

    @app.cli.command("list-users")
    def list_users_command():
        """List every user with their record count."""
        for user in User.query.order_by(User.id).all():
            click.echo(f"ID: {user.id}")
            click.echo(f"Username: {user.username}")
            click.echo(f"Email: {user.email}")
            click.echo(f"Records: {user.records.count()}")
            click.echo(f"Created: {user.created_at.isoformat()}")
            click.echo("-" * 40)

    @app.cli.command("recent-records")
    @click.argument("limit", default=10, type=int)
    def recent_records_command(limit):
        """Show the most recently created records."""
        records = HealthRecord.query.order_by(HealthRecord.created_at.desc()).limit(limit).all()
        for i, record in enumerate(records, start=1):
            click.echo(f"{i}. {record.user.username} - {record.date:%Y-%m-%d}")
            click.echo(f"   Weight: {record.weight}kg | Steps: {record.steps} | Sleep: {record.sleep_hours}h")
            if record.vital_signs:
                click.echo("   Vital Signs:")
                for v in record.vital_signs:
                    click.echo(
                        f"       {v.time_of_day.upper()}: HR {v.heart_rate} | "
                        f"BP {v.blood_pressure_systolic}/{v.blood_pressure_diastolic} | "
                        f"Temp {_fmt(v.temperature, 1)}°C | SpO2 {v.oxygen_saturation}%"
                    )
            if record.notes:
                click.echo(f"   Notes: {record.notes}")
            click.echo("-" * 60)

    @app.cli.command("delete-user")
    @click.argument("email")
    def delete_user_command(email):
        """Delete a user (and their records) by email."""
        try:
            user = user_service.delete_user(db.session, email.strip().lower())
        except NotFound:
            raise click.ClickException(f"No user with email {email}")
        click.echo(f"Deleted user: {user.username} ({user.email})")

    @app.cli.command("create-user")
    @click.option("--username", prompt=True)
    @click.option("--email", prompt=True)
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def create_user_command(username, email, password):
        """Create a user account from the command line."""
        email = email.strip().lower()
        if User.query.filter((User.email == email) | (User.username == username)).first():
            raise click.ClickException(f"User '{username}' or '{email}' already exists.")
        user = user_service.create_user(
            db.session, {"username": username.strip(), "email": email, "password": password}
        )
        click.echo(f"Created user {user.id}: {user.username} <{user.email}>")
