# Overview: Flask CLI command groups; the read-only views and the operator entry points.

# backend/agrostock/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
# - Every command accepts --as USER_ID (defaults to DEFAULT_ACTOR_ID, "u1").
# - The store is in memory: each process starts from the demo data set.
#
# Catalog:
# - python -m flask catalog list
# - python -m flask catalog low-stock
#
# Stock intake:
# - python -m flask stock list [--status PENDING]
# - python -m flask stock intake --product p2 --supplier s2 --warehouse w2 --quantity 40 --batch F-NPK-100
# - python -m flask stock approve st2 --as u2
# - python -m flask stock reject st2 --as u2
#
# Sales:
# - python -m flask sales record --product p1 --quantity 50 --price 500 --customer "Abeokuta Farms Co."
# - python -m flask sales list
# - python -m flask sales totals
#
# Audit trail (ADMIN, AUDITOR):
# - python -m flask audit list [--severity WARNING] [--search maize] [--limit 20]
#
# Reporting:
# - python -m flask report stats
# - python -m flask report summary [--force]
# - python -m flask report nav
#
# Partners and staff:
# - python -m flask suppliers list | create --name "..." [--contact ...] [--category ...]
# - python -m flask users list | create --name "..." --email ... --role STORE_KEEPER
#
# System:
# - python -m flask system seed

from functools import wraps

import click
from flask.cli import with_appcontext

from .exceptions import LedgerError
from .permissions import ROLES, get_navigation
from .services import (
    audit_service,
    intake_service,
    inventory_service,
    reporting_service,
    sales_service,
    seed_service,
    session_service,
    summary_service,
    supplier_service,
    user_service,
)


def _as_option(f):
    return click.option('--as', 'actor_id', default=None, help='Acting user id (defaults to DEFAULT_ACTOR_ID)')(f)


def ledger_command(f):
    """Resolve --as into an actor and turn ledger errors into FAIL lines with exit code 1."""
    @_as_option
    @wraps(f)
    def decorated(actor_id, **kwargs):
        try:
            actor = session_service.get_current_actor(actor_id)
            return f(actor, **kwargs)
        except LedgerError as e:
            click.echo(f"FAIL {e.code}: {e.message}")
            raise click.exceptions.Exit(1)
    return decorated


def _product_line(product):
    flag = "LOW" if product.is_low_stock else ""
    return (f"{product.id:<12} {product.name:<24} {product.category:<12} "
            f"{product.current_stock:>8} {product.unit:<8} {product.low_stock_threshold:>8} {flag}")


def _print_products(products):
    if not products:
        click.echo("No products found.")
        return
    click.echo("\n" + "="*90)
    click.echo(f"{'ID':<12} {'Name':<24} {'Category':<12} {'Stock':>8} {'Unit':<8} {'Min':>8}")
    click.echo("="*90)
    for product in products:
        click.echo(_product_line(product))
    click.echo("="*90 + "\n")


# =============================================================================
# CATALOG
# =============================================================================

@click.group('catalog')
def catalog_group():
    """Product catalog views."""


@catalog_group.command('list')
@with_appcontext
@ledger_command
def list_products_cli(actor):
    """List all products with their stock levels."""
    _print_products(inventory_service.list_products())


@catalog_group.command('low-stock')
@with_appcontext
@ledger_command
def low_stock_cli(actor):
    """List products at or below their low-stock threshold."""
    _print_products(inventory_service.list_low_stock_products())


@catalog_group.command('create')
@click.option('--name', required=True)
@click.option('--category', required=True)
@click.option('--unit', required=True)
@click.option('--threshold', type=int, default=0, help='Low-stock threshold')
@click.option('--stock', type=int, default=0, help='Opening stock')
@with_appcontext
@ledger_command
def create_product_cli(actor, name, category, unit, threshold, stock):
    """Add a product to the catalog (ADMIN, STORE_MANAGER)."""
    product = inventory_service.create_product(
        name=name, category=category, unit=unit, actor=actor,
        low_stock_threshold=threshold, initial_stock=stock,
    )
    click.echo(f"PASS Created product {product.id}: {product.name}")


# =============================================================================
# STOCK INTAKE
# =============================================================================

@click.group('stock')
def stock_group():
    """Stock intake and approval commands."""


@stock_group.command('list')
@click.option('--status', type=click.Choice(['PENDING', 'APPROVED', 'REJECTED']), default=None)
@with_appcontext
@ledger_command
def list_stock_cli(actor, status):
    """List stock entries, newest first."""
    entries = intake_service.list_stock_entries(status=status)
    if not entries:
        click.echo("No stock entries found.")
        return
    click.echo("\n" + "="*96)
    click.echo(f"{'ID':<16} {'Product':<8} {'Batch':<12} {'Qty':>8} {'Supplier':<10} {'Status':<10} {'Received by'}")
    click.echo("="*96)
    for entry in entries:
        click.echo(f"{entry.id:<16} {entry.product_id:<8} {entry.batch_number:<12} {entry.quantity:>8} "
                   f"{entry.supplier_id:<10} {entry.status:<10} {entry.received_by}")
    click.echo("="*96 + "\n")


@stock_group.command('intake')
@click.option('--product', 'product_id', required=True)
@click.option('--supplier', 'supplier_id', required=True)
@click.option('--warehouse', 'warehouse_id', required=True)
@click.option('--quantity', required=True, help='Units received')
@click.option('--batch', 'batch_number', required=True)
@click.option('--weight', type=int, default=None)
@click.option('--expiry', 'expiry_date', default=None, help='YYYY-MM-DD')
@with_appcontext
@ledger_command
def intake_cli(actor, product_id, supplier_id, warehouse_id, quantity, batch_number, weight, expiry_date):
    """Record an incoming batch as PENDING."""
    entry = intake_service.record_stock_entry(
        product_id=product_id,
        supplier_id=supplier_id,
        warehouse_id=warehouse_id,
        quantity=quantity,
        batch_number=batch_number,
        actor=actor,
        weight=weight,
        expiry_date=expiry_date,
    )
    click.echo(f"PASS Recorded stock entry {entry.id} ({entry.quantity} units, batch {entry.batch_number}) PENDING")


@stock_group.command('approve')
@click.argument('entry_id')
@with_appcontext
@ledger_command
def approve_cli(actor, entry_id):
    """Approve a PENDING entry and credit its quantity (ADMIN, STORE_MANAGER)."""
    entry = intake_service.approve_stock_entry(entry_id, actor)
    product = inventory_service.get_product(entry.product_id)
    click.echo(f"PASS Approved {entry.id}: {product.name} stock is now {product.current_stock} {product.unit}")


@stock_group.command('reject')
@click.argument('entry_id')
@with_appcontext
@ledger_command
def reject_cli(actor, entry_id):
    """Reject a PENDING entry (ADMIN, STORE_MANAGER)."""
    entry = intake_service.reject_stock_entry(entry_id, actor)
    click.echo(f"PASS Rejected {entry.id} (batch {entry.batch_number})")


# =============================================================================
# SALES
# =============================================================================

@click.group('sales')
def sales_group():
    """Sales ledger commands."""


@sales_group.command('record')
@click.option('--product', 'product_id', required=True)
@click.option('--quantity', required=True)
@click.option('--price', 'unit_price', required=True, help='Unit price in naira')
@click.option('--customer', 'customer_name', required=True)
@click.option('--phone', 'customer_phone', default=None)
@with_appcontext
@ledger_command
def record_sale_cli(actor, product_id, quantity, unit_price, customer_name, customer_phone):
    """Record a sale and deduct stock."""
    sale = sales_service.record_sale(
        product_id, quantity, unit_price, customer_name, actor, customer_phone=customer_phone
    )
    click.echo(f"PASS Recorded sale {sale.id}: {sale.quantity} x {sale.product_id} "
               f"for {sales_service.format_naira(sale.total_amount_cents)}")


@sales_group.command('list')
@click.option('--limit', type=int, default=None)
@with_appcontext
@ledger_command
def list_sales_cli(actor, limit):
    """List sales, most recent first."""
    sales = sales_service.list_sales(limit=limit)
    if not sales:
        click.echo("No sales found.")
        return
    click.echo("\n" + "="*100)
    click.echo(f"{'ID':<16} {'Product':<8} {'Qty':>6} {'Unit price':>14} {'Total':>16} {'Customer':<22} {'By'}")
    click.echo("="*100)
    for sale in sales:
        click.echo(f"{sale.id:<16} {sale.product_id:<8} {sale.quantity:>6} "
                   f"{sales_service.format_naira(sale.unit_price_cents):>14} "
                   f"{sales_service.format_naira(sale.total_amount_cents):>16} "
                   f"{sale.customer_name:<22} {sale.processed_by}")
    click.echo("="*100 + "\n")


@sales_group.command('totals')
@with_appcontext
@ledger_command
def sales_totals_cli(actor):
    """Show sales count, units and revenue."""
    totals = sales_service.get_sales_totals()
    click.echo(f"Sales: {totals['sale_count']}")
    click.echo(f"Units sold: {totals['units_sold']}")
    click.echo(f"Revenue: {sales_service.format_naira(totals['revenue_cents'])}")


# =============================================================================
# AUDIT
# =============================================================================

@click.group('audit')
def audit_group():
    """Audit trail commands."""


@audit_group.command('list')
@click.option('--severity', type=click.Choice(['INFO', 'WARNING', 'CRITICAL']), default=None)
@click.option('--search', default=None, help='Match details, action or user name')
@click.option('--limit', type=int, default=None)
@with_appcontext
@ledger_command
def list_audit_cli(actor, severity, search, limit):
    """List audit entries, most recent first (ADMIN, AUDITOR)."""
    entries = audit_service.list_audit_entries(actor, severity=severity, search=search, limit=limit)
    if not entries:
        click.echo("No audit entries found.")
        return
    for entry in entries:
        stamp = entry.timestamp.strftime('%Y-%m-%d %H:%M:%S') if entry.timestamp else '-'
        click.echo(f"{stamp}  {entry.severity:<8} {entry.action:<18} {entry.user_name:<20} {entry.details}")


# =============================================================================
# REPORTING
# =============================================================================

@click.group('report')
def report_group():
    """Dashboard and AI summary commands."""


@report_group.command('stats')
@with_appcontext
@ledger_command
def stats_cli(actor):
    """Show dashboard figures."""
    stats = reporting_service.get_dashboard_stats()
    click.echo(f"Total revenue:     {sales_service.format_naira(stats['total_revenue_cents'])}")
    click.echo(f"Low stock items:   {stats['low_stock_count']}")
    click.echo(f"Pending approvals: {stats['pending_approvals']}")
    click.echo(f"Active suppliers:  {stats['active_suppliers']}")


@report_group.command('summary')
@click.option('--force', is_flag=True, help='Regenerate even if the data has not changed')
@with_appcontext
@ledger_command
def summary_cli(actor, force):
    """Print the AI executive summary of business health."""
    products, sales = reporting_service.build_summary_snapshot()
    board = summary_service.get_summary_board()
    click.echo(board.refresh(products, sales, force=force))


@report_group.command('nav')
@with_appcontext
@ledger_command
def nav_cli(actor):
    """List the menu sections visible to the acting user."""
    click.echo(f"{actor.user_name} ({actor.role})")
    for item in get_navigation(actor.role):
        click.echo(f"  - {item['name']}")


# =============================================================================
# SUPPLIERS
# =============================================================================

@click.group('suppliers')
def suppliers_group():
    """Supplier and warehouse commands."""


@suppliers_group.command('list')
@with_appcontext
@ledger_command
def list_suppliers_cli(actor):
    """List active suppliers and warehouses."""
    for supplier in supplier_service.list_suppliers():
        click.echo(f"{supplier.id:<12} {supplier.name:<28} {supplier.contact or '-':<20} {supplier.category or '-'}")
    click.echo("")
    for warehouse in supplier_service.list_warehouses():
        click.echo(f"{warehouse.id:<12} {warehouse.name:<28} {warehouse.location or '-'}")


@suppliers_group.command('create')
@click.option('--name', required=True)
@click.option('--contact', default=None)
@click.option('--category', default=None)
@with_appcontext
@ledger_command
def create_supplier_cli(actor, name, contact, category):
    """Register a supplier (ADMIN, STORE_MANAGER)."""
    supplier = supplier_service.create_supplier(name=name, actor=actor, contact=contact, category=category)
    click.echo(f"PASS Created supplier {supplier.id}: {supplier.name}")


# =============================================================================
# USERS
# =============================================================================

@click.group('users')
def users_group():
    """Staff account commands."""


@users_group.command('list')
@with_appcontext
@ledger_command
def list_users_cli(actor):
    """List active users with their roles."""
    for user in user_service.list_users():
        click.echo(f"{user.id:<12} {user.name:<24} {user.email:<32} {user.role}")


@users_group.command('create')
@click.option('--name', required=True)
@click.option('--email', required=True)
@click.option('--role', type=click.Choice(list(ROLES)), required=True)
@with_appcontext
@ledger_command
def create_user_cli(actor, name, email, role):
    """Create a staff account (ADMIN)."""
    user = user_service.create_user(name=name, email=email, role=role, actor=actor)
    click.echo(f"PASS Created user {user.id}: {user.name} ({user.role})")


# =============================================================================
# SYSTEM
# =============================================================================

@click.group('system')
def system_group():
    """System bootstrap commands."""


@system_group.command('seed')
@with_appcontext
def seed_cli():
    """Load the demo data set if the store is empty."""
    if seed_service.seed_demo_data():
        click.echo("PASS Demo data loaded")
    else:
        click.echo("WARN  Demo data already present, skipping...")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(catalog_group)
    app.cli.add_command(stock_group)
    app.cli.add_command(sales_group)
    app.cli.add_command(audit_group)
    app.cli.add_command(report_group)
    app.cli.add_command(suppliers_group)
    app.cli.add_command(users_group)
    app.cli.add_command(system_group)
