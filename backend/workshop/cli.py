# Overview: Flask CLI command groups for bootstrap, inspection, and maintenance.

# backend/workshop/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap:
# - python -m flask system init [--name "John Smith"] [--email john@workshop.com]
#   Create tables and the first owner account (idempotent).
# - python -m flask system seed-demo
#   Load the demo workshop (users, parts, two job cards, one invoice).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Users:
# - python -m flask users list
# - python -m flask users create --actor-id 1 --name "Sarah Davis" --email sarah@workshop.com --role admin
#
# Capabilities:
# - python -m flask perms list [--role worker] [--category INVOICES]
# - python -m flask perms show GENERATE_INVOICE
#
# Activity log:
# - python -m flask logs list --role admin [--action GENERATE_INVOICE] [--limit 50]

import click
from flask import current_app
from flask.cli import with_appcontext

from .domain import ACTIONS, ROLES
from .errors import WorkshopError
from .extensions import db
from .permissions import (
    PERMISSION_DEFINITIONS,
    PermissionCategory,
    get_permission_definition,
    get_permissions_by_category,
    get_role_permissions,
)
from .repositories import SqlRepository
from .services import audit_service, demo_service, search_service, user_service
from .time_utils import to_utc_z


CATEGORIES = [
    PermissionCategory.DASHBOARD,
    PermissionCategory.INVENTORY,
    PermissionCategory.JOB_CARDS,
    PermissionCategory.INVOICES,
    PermissionCategory.USERS,
    PermissionCategory.AUDIT,
]


def _repo() -> SqlRepository:
    return SqlRepository(db.session)


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@click.option('--name', default='John Smith', show_default=True, help='Owner name')
@click.option('--email', default='john@workshop.com', show_default=True, help='Owner email')
@with_appcontext
def init_system(name, email):
    """Create tables and the first owner account."""
    click.echo("START Initializing workshop...")
    db.create_all()
    click.echo("PASS Tables ready")

    repo = _repo()
    existing = repo.list("users")
    if existing:
        owners = [u for u in existing if u.role == "owner"]
        click.echo(f"PASS Users already exist ({len(existing)}, owners: {len(owners)}); skipping owner bootstrap")
        return

    owner = user_service.bootstrap_owner(repo, name, email)
    click.echo(f"PASS Created owner: {owner.name} <{owner.email}> (ID: {owner.id})")
    if owner.id != current_app.config["WORKSHOP_DEMO_USER_ID"]:
        click.echo(f"WARN WORKSHOP_DEMO_USER_ID is {current_app.config['WORKSHOP_DEMO_USER_ID']}, owner is {owner.id}")


@system_group.command('seed-demo')
@with_appcontext
def seed_demo():
    """Load the demo workshop through the regular services."""
    try:
        counts = demo_service.seed_demo_workshop(_repo())
    except WorkshopError as e:
        raise click.ClickException(str(e))
    summary = ", ".join(f"{k}={v}" for k, v in counts.items())
    click.echo(f"PASS Demo data loaded: {summary}")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA, including the activity log!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()
    click.echo("BUILD  Creating all tables...")
    db.create_all()
    click.echo("PASS Database reset complete. Run 'python -m flask system init' to initialize.")


@click.group('users')
def users_group():
    """User inspection and management."""


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users with their roles."""
    users = _repo().list("users")
    if not users:
        click.echo("No users found.")
        return

    click.echo("\n" + "=" * 80)
    click.echo(f"{'ID':<5} {'Name':<25} {'Email':<30} {'Role'}")
    click.echo("=" * 80)
    for user in users:
        click.echo(f"{user.id:<5} {user.name:<25} {user.email:<30} {user.role}")
    click.echo("=" * 80 + "\n")


@users_group.command('create')
@click.option('--actor-id', type=int, required=True, help='ID of the owner performing the change')
@click.option('--name', prompt=True, help='Full name')
@click.option('--email', prompt=True, help='Email address')
@click.option('--role', type=click.Choice(list(ROLES)), prompt=True, help='Role')
@with_appcontext
def create_user_cli(actor_id, name, email, role):
    """Add a user on behalf of an owner."""
    repo = _repo()
    actor = user_service.get_user(repo, actor_id)
    if actor is None:
        raise click.ClickException(f"No user with ID {actor_id}")
    try:
        user = user_service.add_user(repo, actor, {"name": name, "email": email, "role": role})
    except WorkshopError as e:
        raise click.ClickException(str(e))
    click.echo(f"PASS Created user: {user.name} <{user.email}> role '{user.role}' (ID: {user.id})")


@click.group('perms')
def perms_group():
    """Capability inspection."""


@perms_group.command('list')
@click.option('--role', type=click.Choice(list(ROLES)), help='Only capabilities granted to this role')
@click.option('--category', type=click.Choice(CATEGORIES), help='Only capabilities in this category')
def list_perms(role, category):
    """List capabilities (optionally filtered by role and category)."""
    granted = get_role_permissions(role) if role else None
    definitions = get_permissions_by_category(category) if category else PERMISSION_DEFINITIONS
    for code, name, description, perm_category in definitions:
        if granted is not None and code not in granted:
            continue
        click.echo(f"{code:<22} {perm_category:<10} {', '.join(_holders(code)):<20} {description}")


@perms_group.command('show')
@click.argument('code')
def show_perm(code):
    """Show one capability and the roles that hold it."""
    definition = get_permission_definition(code.upper())
    if definition is None:
        raise click.ClickException(f"Unknown capability: {code}")
    click.echo(f"{definition['code']} ({definition['name']})")
    click.echo(f"  Category:    {definition['category']}")
    click.echo(f"  Description: {definition['description']}")
    click.echo(f"  Roles:       {', '.join(_holders(definition['code']))}")


def _holders(code):
    return [r for r in ROLES if code in get_role_permissions(r)]


@click.group('logs')
def logs_group():
    """Activity log inspection."""


@logs_group.command('list')
@click.option('--role', type=click.Choice(list(ROLES)), default='owner', show_default=True,
              help='View the log as this role sees it')
@click.option('--action', type=click.Choice(list(ACTIONS)), help='Only this action')
@click.option('--search', help='Case-insensitive match on user, action or details')
@click.option('--limit', type=int, default=50, show_default=True)
@with_appcontext
def list_logs(role, action, search, limit):
    """Show the activity log, most recent first."""
    entries = audit_service.query(
        _repo(),
        role,
        window_hours=current_app.config["WORKSHOP_LOG_WINDOW_HOURS"],
    )
    entries = search_service.filter_logs(entries, search=search, action=action)
    if not entries:
        click.echo("No activity found.")
        return
    for entry in entries[:max(limit, 1)]:
        click.echo(f"{to_utc_z(entry.occurred_at)}  {entry.user_name:<20} {entry.action:<24} {entry.details}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(perms_group)
    app.cli.add_command(logs_group)
