"""
Rich console output for IPLens
"""

from typing import Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich import box
from rich.markup import escape

from .. import __version__
from ..models import Details, LiteDetails, CoreDetails


def _join(*parts: Optional[str]) -> str:
    return ", ".join(p for p in parts if p) or "-"


def summarize(record) -> dict[str, str]:
    """
    Flatten any record type into the columns shown on the console.

    Returns:
        Dict with ip, location, country, network and timezone keys
    """
    if isinstance(record, CoreDetails):
        geo = record.geo
        network = _join(record.as_.asn, record.as_.name) if record.as_ else "-"
        return {
            'ip': record.ip,
            'location': _join(geo.city, geo.region) if geo else "-",
            'country': _format_country(geo.country_flag, geo.country_name or geo.country) if geo else "-",
            'network': network,
            'timezone': (geo.timezone if geo else None) or "-",
        }

    if isinstance(record, LiteDetails):
        return {
            'ip': record.ip,
            'location': record.continent or "-",
            'country': _format_country(record.country_flag, record.country_name or record.country),
            'network': _join(record.asn, record.as_name),
            'timezone': "-",
        }

    return {
        'ip': record.ip,
        'location': _join(record.city, record.region),
        'country': _format_country(record.country_flag, record.country_name or record.country),
        'network': record.org or "-",
        'timezone': record.timezone or "-",
    }


def _format_country(flag, name: Optional[str]) -> str:
    if not name:
        return "-"
    if flag:
        return f"{flag.emoji} {name}"
    return name


class ConsoleOutput:
    """
    Rich console output for lookup results.

    Single lookups render as a panel, batches as one table row per
    address. Bogons are tagged instead of showing empty columns.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_header(self, title: str, count: int):
        """Print a header panel for a lookup run"""
        content = Text()
        content.append("IPLens", style="bold cyan")
        content.append(f" v{__version__}\n", style="dim")
        content.append(title, style="bold")
        content.append(f"  |  {count} address{'es' if count != 1 else ''}", style="dim")

        self.console.print(Panel(content, border_style="cyan", padding=(0, 1)))

    def print_details(self, record):
        """Print one record as a key/value panel"""
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Field", style="bold magenta")
        table.add_column("Value")

        if record.bogon:
            table.add_row("Status", Text("bogon (not routable)", style="yellow"))
        else:
            summary = summarize(record)
            table.add_row("Location", escape(summary['location']))
            table.add_row("Country", escape(summary['country']))
            table.add_row("Network", escape(summary['network']))
            table.add_row("Timezone", escape(summary['timezone']))
            for label, value in self._extra_rows(record):
                table.add_row(label, escape(value))

        self.console.print(Panel(table, title=Text(record.ip, style="bold"), border_style="blue"))

    def print_batch(self, results: dict):
        """Print a batch result as a table"""
        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.ROUNDED,
            border_style="dim",
            padding=(0, 1)
        )

        table.add_column("IP", min_width=15)
        table.add_column("Location")
        table.add_column("Country")
        table.add_column("Network", overflow="ellipsis")

        for ip, record in results.items():
            if record.bogon:
                table.add_row(escape(ip), Text("bogon", style="yellow"), "-", "-")
                continue
            summary = summarize(record)
            table.add_row(
                escape(ip),
                escape(summary['location']),
                escape(summary['country']),
                escape(summary['network']),
            )

        self.console.print(table)

    def print_bogon(self, ip: str, network):
        """Print the outcome of a bogon check"""
        if network is None:
            self.console.print(f"{escape(ip)}: [green]not a bogon[/]")
        else:
            self.console.print(f"{escape(ip)}: [yellow]bogon[/] [dim]({network})[/]")

    def print_map_url(self, url: str):
        """Print the report URL of a map request"""
        self.console.print(f"[bold]Map:[/] {escape(url)}")

    def print_error(self, message: str):
        """Print error message"""
        self.console.print(f"[bold red]Error:[/] {escape(message)}")

    def print_warning(self, message: str):
        """Print warning message"""
        self.console.print(f"[yellow]Warning:[/] {escape(message)}")

    def _extra_rows(self, record) -> list[tuple[str, str]]:
        """Rows only the standard record carries"""
        if not isinstance(record, Details):
            return []

        rows = []
        if record.hostname:
            rows.append(("Hostname", record.hostname))
        if record.loc:
            rows.append(("Coordinates", record.loc))
        if record.country_currency:
            currency = record.country_currency
            rows.append(("Currency", f"{currency.code} ({currency.symbol})"))
        if record.is_eu is not None:
            rows.append(("EU", "yes" if record.is_eu else "no"))
        return rows
