'''
    File Name: main.py
    Version: 3.0.0
    Date: 22/01/2026
    Author: Pablo Bartolomé Molina
'''
import locale
import logging
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Optional

import typer

import config
from database.db_manager import DatabaseManager
from models.errors import FinanceTrackerError
from models.transaction import Transaction, is_known_category
from reports import charts
from reports.summaries import DashboardSummary, ProfileSummary, TransactionListView

logger = logging.getLogger(__name__)

app = typer.Typer(
    help=f"{config.APP_NAME} {config.APP_VERSION}: record income/expenses and view summaries.",
    add_completion=False,
    no_args_is_help=True,
)

USER_OPTION = typer.Option(..., "--user", "-u", envvar="FINANCE_TRACKER_USER", help="Owner id of the records.")
DB_OPTION = typer.Option(None, "--db", help="SQLite database path (defaults to the configured data dir).")


def _open_store(db: Optional[Path]) -> DatabaseManager:
    if db is None:
        config.ensure_data_dir()
    dm = DatabaseManager(db)
    dm.ensure_database()
    return dm


@contextmanager
def _reported_errors():
    """Print tracker errors to stderr and exit 1 instead of a traceback."""
    try:
        yield
    except FinanceTrackerError as exc:
        typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    except OSError as exc:
        logger.exception("File operation failed")
        typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)


def _money(value) -> str:
    return f"{value:,.2f}"


def _format_row(tx: Transaction) -> str:
    sign = "+" if tx.is_income else "-"
    notes = f"  {tx.notes}" if tx.notes else ""
    return f"{tx.id}  {tx.date.isoformat()}  {sign}{_money(tx.amount):>12}  {tx.category}{notes}"


def _warn_category(category: Optional[str]) -> None:
    if category and not is_known_category(category):
        typer.secho(f"Note: '{category}' is not one of the default categories.", err=True, fg=typer.colors.YELLOW)


@app.command()
def add(
    amount: str = typer.Option(..., "--amount", "-a", help="Positive amount."),
    category: str = typer.Option(config.DEFAULT_CATEGORY, "--category", "-c"),
    tx_type: str = typer.Option("expense", "--type", "-t", help="income or expense."),
    tx_date: Optional[str] = typer.Option(None, "--date", "-d", help="YYYY-MM-DD, defaults to today."),
    notes: str = typer.Option("", "--notes", "-n"),
    user: str = USER_OPTION,
    db: Optional[Path] = DB_OPTION,
):
    """Record a new transaction."""
    with _reported_errors():
        store = _open_store(db)
        candidate = {
            "amount": amount,
            "category": category,
            "type": tx_type,
            "date": tx_date or date.today().isoformat(),
            "notes": notes,
        }
        _warn_category(category)
        new_id = store.create(candidate, owner_id=user)
        typer.echo(f"Transaction added (id={new_id})")


@app.command()
def edit(
    tx_id: str = typer.Argument(..., help="Id of the transaction to change."),
    amount: Optional[str] = typer.Option(None, "--amount", "-a"),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
    tx_type: Optional[str] = typer.Option(None, "--type", "-t"),
    tx_date: Optional[str] = typer.Option(None, "--date", "-d"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n"),
    user: str = USER_OPTION,
    db: Optional[Path] = DB_OPTION,
):
    """Change fields of one of your transactions."""
    changes = {
        key: value
        for key, value in (("amount", amount), ("category", category), ("type", tx_type),
                           ("date", tx_date), ("notes", notes))
        if value is not None
    }
    if not changes:
        typer.echo("No changes made")
        return
    with _reported_errors():
        store = _open_store(db)
        _warn_category(category)
        store.update(tx_id, changes, owner_id=user)
        typer.echo(f"Transaction updated (id={tx_id})")


@app.command()
def delete(
    tx_id: str = typer.Argument(...),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
    user: str = USER_OPTION,
    db: Optional[Path] = DB_OPTION,
):
    """Delete one of your transactions. This cannot be undone."""
    with _reported_errors():
        store = _open_store(db)
        store.get(tx_id, owner_id=user)
        if not yes and not typer.confirm(f"Are you sure you want to delete transaction id={tx_id}?"):
            typer.echo("Delete cancelled")
            return
        store.delete(tx_id, owner_id=user)
        typer.echo(f"Transaction deleted (id={tx_id})")


@app.command("list")
def list_transactions(
    type_filter: str = typer.Option("all", "--type", "-t", help="all, income or expense."),
    query: str = typer.Option("", "--search", "-s", help="Match category or notes."),
    sort_key: str = typer.Option("date", "--sort", help="date, amount or category."),
    user: str = USER_OPTION,
    db: Optional[Path] = DB_OPTION,
):
    """List transactions with filter, search and sort."""
    with _reported_errors():
        store = _open_store(db)
        try:
            view = TransactionListView.from_records(store.snapshot(user), type_filter, query, sort_key)
        except ValueError as exc:
            raise typer.BadParameter(str(exc))
        for tx in view.items:
            typer.echo(_format_row(tx))
        typer.echo(
            f"{view.count} transaction(s)  income {_money(view.income)}  expenses {_money(view.expenses)}"
        )


@app.command()
def dashboard(
    full_date: bool = typer.Option(False, "--full-date", help="Bucket the time series by full date."),
    user: str = USER_OPTION,
    db: Optional[Path] = DB_OPTION,
):
    """Show totals, spending by category, daily series and recent transactions."""
    with _reported_errors():
        summary = DashboardSummary.from_records(_open_store(db).snapshot(user), by_full_date=full_date)
    typer.echo(f"Total Income:   {_money(summary.total_income)}")
    typer.echo(f"Total Expenses: {_money(summary.total_expenses)}")
    typer.echo(f"Balance:        {_money(summary.balance)}")
    if summary.categories:
        typer.echo("\nSpending by Category")
        for item in sorted(summary.categories, key=lambda c: c.total, reverse=True):
            typer.echo(f"  {item.category:<15} {_money(item.total):>12}")
    if summary.time_series:
        typer.echo("\nIncome vs Expenses")
        for point in summary.time_series:
            typer.echo(f"  {point.label:<12} +{_money(point.income):>11} -{_money(point.expenses):>11}")
    if summary.recent:
        typer.echo("\nRecent Transactions")
        for tx in summary.recent:
            typer.echo(f"  {_format_row(tx)}")


@app.command()
def profile(
    user: str = USER_OPTION,
    db: Optional[Path] = DB_OPTION,
):
    """Show account statistics and this month's totals."""
    with _reported_errors():
        stats = ProfileSummary.from_records(_open_store(db).snapshot(user))
    typer.echo(f"User:                {user}")
    typer.echo(f"Total Transactions:  {stats.transaction_count}")
    typer.echo(f"This Month Income:   {_money(stats.month_income)}")
    typer.echo(f"This Month Expenses: {_money(stats.month_expenses)}")
    typer.echo(f"Balance:             {_money(stats.balance)}")
    typer.echo(f"Average Transaction: {_money(stats.average_transaction)}")
    typer.echo(f"Savings Rate:        {stats.savings_rate:.1f}%")


@app.command()
def chart(
    output: Path = typer.Argument(..., help="Image file to write (e.g. dashboard.png)."),
    user: str = USER_OPTION,
    db: Optional[Path] = DB_OPTION,
):
    """Render the dashboard charts to an image file."""
    with _reported_errors():
        path = charts.save_dashboard(_open_store(db).snapshot(user), output)
    typer.echo(f"Chart written to {path}")


@app.command("export")
def export_csv(
    path: Path = typer.Argument(...),
    user: str = USER_OPTION,
    db: Optional[Path] = DB_OPTION,
):
    """Export your transactions to CSV."""
    with _reported_errors():
        count = _open_store(db).export_to_csv(user, path)
    typer.echo(f"Exported {count} transaction(s) to {path}")


@app.command("import")
def import_csv(
    path: Path = typer.Argument(..., exists=True, dir_okay=False),
    user: str = USER_OPTION,
    db: Optional[Path] = DB_OPTION,
):
    """Import transactions from CSV; invalid rows are skipped."""
    with _reported_errors():
        count = _open_store(db).import_from_csv(user, path)
    if count == 0:
        typer.secho("No transactions were imported from the file", err=True, fg=typer.colors.YELLOW)
        return
    typer.echo(f"Imported {count} transaction(s) from {path}")


def main() -> None:
    logging.basicConfig(**config.LOGGING_CONFIG)
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.debug("Could not set collation locale; using the default.")
    app()


if __name__ == "__main__":
    main()
