"""
Zex POS reporting CLI.

Command-line interface for common operator tasks: creating tables, seeding
demo data, printing reports and minting development tokens.
"""

import sys
import time
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="zex-pos",
    help="Zex POS reporting CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init():
    """Create database tables."""
    from rest_api.models import Base
    from shared.infrastructure.db import engine

    Base.metadata.create_all(bind=engine)
    console.print("[green]✓ Tables created/verified[/green]")


@app.command()
def db_seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding in production"),
):
    """Seed database with demo data."""
    from rest_api.seed import seed
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context

    if settings.environment == "production" and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    with get_db_context() as db:
        inserted = seed(db)

    if inserted:
        console.print("[green]✓ Demo data seeded[/green]")
    else:
        console.print("[yellow]Demo data already present, nothing to do[/yellow]")


# =============================================================================
# Report Commands
# =============================================================================

@app.command()
def report(
    restaurant_id: int = typer.Argument(..., help="Restaurant id"),
    date: Optional[str] = typer.Option(None, "--date", "-d", help="YYYY-MM-DD, defaults to today"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw report"),
):
    """Print the end-of-day report of a restaurant."""
    from rest_api.services.domain import EndOfDayReportService
    from shared.infrastructure.db import get_db_context
    from shared.utils.dates import business_now
    from shared.utils.exceptions import AppException
    from shared.utils.validators import parse_report_date

    try:
        report_date = parse_report_date(date, default=business_now().date())
        with get_db_context() as db:
            result = EndOfDayReportService(db).build_report(restaurant_id, report_date)
    except AppException as e:
        console.print(f"[red]✗ {e.detail} ({e.reason})[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(result.model_dump_json())
        return

    summary = Table(title=f"End of day · restaurant {restaurant_id} · {result.date}")
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", style="green", justify="right")
    summary.add_row("Orders", str(result.summary.total_orders))
    summary.add_row("Subtotal", f"{result.summary.subtotal:.2f}")
    summary.add_row(f"Service charge ({result.settings.service_charge_rate}%)", f"{result.summary.service_charge:.2f}")
    summary.add_row(f"GST ({result.settings.gst_rate}%)", f"{result.summary.gst_amount:.2f}")
    summary.add_row("Grand total", f"{result.summary.grand_total:.2f}")
    summary.add_row("Average order", f"{result.summary.average_order_value:.2f}")
    console.print(summary)

    categories = Table(title="By category")
    categories.add_column("Category", style="cyan")
    categories.add_column("Qty", justify="right")
    categories.add_column("Total", style="green", justify="right")
    for name, entry in result.category_breakdown.items():
        categories.add_row(name, str(entry.count), f"{entry.total:.2f}")
    console.print(categories)

    payments = Table(title="By payment method")
    payments.add_column("Method", style="cyan")
    payments.add_column("Total", style="green", justify="right")
    for method, amount in result.payment_methods.model_dump().items():
        payments.add_row(method, f"{amount:.2f}")
    console.print(payments)


@app.command()
def metrics(
    restaurant_ids: list[int] = typer.Argument(..., help="Restaurant ids"),
):
    """Print today's dashboard metrics for a set of restaurants."""
    from rest_api.services.domain import MetricsService
    from shared.infrastructure.db import get_db_context
    from shared.utils.dates import business_now

    with get_db_context() as db:
        result = MetricsService(db).compute_daily_metrics(restaurant_ids, business_now())
    console.print_json(result.model_dump_json(by_alias=True))


# =============================================================================
# Auth Commands
# =============================================================================

@app.command()
def token(
    staff_id: int = typer.Argument(..., help="Staff id (sub claim)"),
    role: str = typer.Option("server", help="Role claim"),
    organization_id: Optional[int] = typer.Option(None, help="organization_id claim"),
    restaurant_id: Optional[int] = typer.Option(None, help="restaurant_id claim"),
    ttl: int = typer.Option(3600, help="Lifetime in seconds"),
):
    """Mint a development access token."""
    from shared.config.constants import Role
    from shared.config.settings import settings
    from shared.security.auth import sign_jwt

    if settings.environment == "production":
        console.print("[red]Refusing to mint tokens in production[/red]")
        raise typer.Exit(1)
    if role not in {r.value for r in Role}:
        console.print(f"[red]Unknown role: {role}[/red]")
        raise typer.Exit(1)

    claims = {"sub": str(staff_id), "role": role}
    if organization_id is not None:
        claims["organization_id"] = organization_id
    if restaurant_id is not None:
        claims["restaurant_id"] = restaurant_id
    console.print(sign_jwt(claims, ttl_seconds=ttl), soft_wrap=True)


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    url: str = typer.Option("http://localhost:8000/api/health/detailed", help="Health endpoint"),
):
    """Check REST API health."""
    table = Table(title="Service Health")
    table.add_column("Service", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    start = time.perf_counter()
    try:
        response = httpx.get(url, timeout=5.0)
    except httpx.HTTPError as e:
        table.add_row("REST API", f"✗ {type(e).__name__}", "-")
        console.print(table)
        raise typer.Exit(1)
    elapsed = (time.perf_counter() - start) * 1000

    if response.status_code == 200:
        table.add_row("REST API", "✓ Healthy", f"{elapsed:.0f}ms")
    else:
        table.add_row("REST API", f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
    for name, dep in response.json().get("dependencies", {}).items():
        table.add_row(f"  {name}", dep.get("status", "?"), f"{dep.get('latency_ms', '-')}ms")
    console.print(table)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Zex POS Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
