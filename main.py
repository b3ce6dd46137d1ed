#!/usr/bin/env python3
"""
Hospital Lab Test Management - Main Entry Point
Menu driver over the lab workflow: patients, orders, samples, results, invoices.
"""

import sys
import logging
from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.text import Text

from labtrack.core.config import settings
from labtrack.core.exceptions import LISException, AlreadyInvoicedException
from labtrack.api.schemas import OrderTrace
from labtrack.models import Invoice
from labtrack.services import LabContext, create_lab_context
from labtrack.services.seed import seed_demo_data

logger = logging.getLogger(__name__)
console = Console()


def setup_logging():
    """Configure logging from settings"""
    handlers = [logging.StreamHandler()]
    if settings.log_to_file:
        settings.create_log_directory()
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=settings.log_format,
        handlers=handlers
    )


def display_welcome():
    """Display welcome message and system information"""

    welcome_text = Text()
    welcome_text.append(f"🏥 {settings.app_name}\n", style="bold blue")
    welcome_text.append(f"Version: {settings.app_version}\n", style="green")
    welcome_text.append(f"Environment: {settings.environment}\n", style="yellow")
    welcome_text.append("Storage: in-memory (lost on exit)", style="cyan")

    console.print(Panel(welcome_text, title="[bold]Lab System Status[/bold]", border_style="blue"))


def report_error(error: LISException):
    """Show a rejected operation as a labelled outcome"""
    console.print(f"❌ [{error.error_code}] {escape(error.message)}")


def format_money(amount: float) -> str:
    return f"{amount:.2f} {settings.currency}"


def read_int(prompt: str) -> int:
    """Prompt until the user enters an integer"""
    return IntPrompt.ask(prompt)


def create_patient(ctx: LabContext):
    name = Prompt.ask("Patient name").strip()
    dob = Prompt.ask("DOB (YYYY-MM-DD)").strip()
    phone = Prompt.ask("Phone").strip()

    patient = ctx.workflow.register_patient(name, dob, phone)
    console.print(f"✅ Created {escape(repr(patient))}")


def list_patients(ctx: LabContext) -> bool:
    patients = ctx.queries.list_patients()
    if not patients:
        console.print("No patients.")
        return False

    table = Table(title="Patients")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("DOB", style="green")
    table.add_column("Phone", style="magenta")
    for patient in patients:
        table.add_row(
            str(patient.id),
            escape(patient.name),
            escape(patient.date_of_birth or "N/A"),
            escape(patient.phone or "N/A")
        )

    console.print(table)
    return True


def list_lab_tests(ctx: LabContext):
    table = Table(title="Available Lab Tests")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Code", style="green")
    table.add_column("Name", style="white")
    table.add_column("Price", style="yellow", justify="right")
    for lab_test in ctx.queries.list_lab_tests():
        table.add_row(str(lab_test.id), escape(lab_test.code), escape(lab_test.name), format_money(lab_test.price))

    console.print(table)


def list_orders(ctx: LabContext) -> bool:
    orders = ctx.queries.list_orders()
    if not orders:
        console.print("No orders.")
        return False

    table = Table(title="Orders")
    table.add_column("Order", style="cyan", no_wrap=True)
    table.add_column("Patient", style="white")
    table.add_column("Item", style="cyan")
    table.add_column("Test", style="green")
    table.add_column("Status", style="magenta")
    table.add_column("Invoiced", style="yellow")
    for order in orders:
        for index, item in enumerate(order.items):
            first = index == 0
            table.add_row(
                str(order.id) if first else "",
                escape(order.patient.name) if first else "",
                str(item.id),
                escape(item.lab_test.name),
                item.status.value,
                ("yes" if order.invoiced else "no") if first else ""
            )

    console.print(table)
    return True


def create_order(ctx: LabContext):
    if not ctx.queries.list_patients():
        console.print("No patients registered. Create a patient first.")
        return

    console.print("Select patient by ID:")
    list_patients(ctx)
    patient_id = read_int("Patient ID")
    if ctx.queries.get_patient(patient_id) is None:
        console.print("Invalid patient id.")
        return

    lab_test_ids: List[int] = []
    while True:
        list_lab_tests(ctx)
        lab_test_id = read_int("Enter LabTest id to add (0 to stop)")
        if lab_test_id == 0:
            break
        lab_test = ctx.queries.get_lab_test(lab_test_id)
        if lab_test is None:
            console.print("Invalid lab test id.")
            continue
        lab_test_ids.append(lab_test_id)
        console.print(f"Added {escape(lab_test.name)} (item id is assigned when the order is created)")
        if not Confirm.ask("Add another test?", default=False):
            break

    order = ctx.workflow.create_order(patient_id, lab_test_ids, skip_unknown_tests=True)
    console.print(f"✅ Created order {escape(repr(order))}")
    for item in order.items:
        console.print(f"   Order item id {item.id}: {escape(item.lab_test.name)}")


def choose_order(ctx: LabContext) -> OrderTrace:
    list_orders(ctx)
    order_id = read_int("Order ID")
    return ctx.queries.trace_order(order_id)


def collect_sample(ctx: LabContext):
    console.print("Collect sample for an order item.")
    trace = choose_order(ctx)
    item_id = read_int("Enter order item id to collect sample for")
    sample_type = Prompt.ask("Sample type (e.g., Blood, Urine)").strip()

    sample = ctx.workflow.collect_sample(trace.order.id, item_id, sample_type)
    console.print(f"✅ Sample collected: {escape(repr(sample))}")


def record_result(ctx: LabContext):
    console.print("Record result for an order item.")
    trace = choose_order(ctx)
    item_id = read_int("Enter order item id to record result for")
    value = Prompt.ask("Result value (e.g., 5.6 or Negative)").strip()
    unit = Prompt.ask("Unit (or '-' if none)").strip()
    observation = Prompt.ask("Short observation/comment").strip()

    result = ctx.workflow.record_result(trace.order.id, item_id, value, unit, observation)
    console.print(f"✅ Recorded result: {escape(repr(result))}")


def display_invoice(invoice: Invoice):
    table = Table(title=f"Invoice {invoice.id} - order {invoice.order_id} ({escape(invoice.order.patient.name)})")
    table.add_column("Item", style="cyan")
    table.add_column("Code", style="green")
    table.add_column("Test", style="white")
    table.add_column("Price", style="yellow", justify="right")
    for line in invoice.lines:
        table.add_row(str(line.item_id), escape(line.test_code), escape(line.test_name), format_money(line.price))
    table.add_row("", "", "[bold]Total[/bold]", f"[bold]{format_money(invoice.total_amount)}[/bold]")

    console.print(table)
    console.print(f"Issued at {invoice.issued_at:%Y-%m-%d %H:%M:%S}")


def generate_invoice(ctx: LabContext):
    console.print("Generate invoice for order.")
    list_orders(ctx)
    order_id = read_int("Order ID")

    try:
        invoice = ctx.workflow.generate_invoice(order_id)
    except AlreadyInvoicedException as e:
        console.print(f"ℹ️  {escape(e.message)}. Existing invoices:")
        for existing in ctx.queries.invoices_for_order(order_id):
            display_invoice(existing)
        return

    console.print("✅ Invoice generated:")
    display_invoice(invoice)


def view_order_trace(ctx: LabContext):
    console.print("View order trace.")
    trace = choose_order(ctx)
    order = trace.order

    console.print(
        f"[bold]Order {order.id}[/bold] - patient {escape(order.patient_name)} "
        f"- created {order.created_at:%Y-%m-%d %H:%M:%S} - {order.item_count} item(s)"
    )
    for item in trace.items:
        console.print(f"  -> Item {item.id}: {escape(item.lab_test.name)} ({item.status})")
        if item.sample is not None:
            console.print(f"       Sample: #{item.sample.id} {escape(item.sample.sample_type)} at {item.sample.collected_at:%Y-%m-%d %H:%M:%S}")
        else:
            console.print("       Sample: [not collected]", markup=False)
        if item.result is not None:
            result = item.result
            console.print(f"       Result: #{result.id} {escape(result.value)} {escape(result.unit or '')} ({escape(result.observation or '')})")
        else:
            console.print("       Result: [not recorded]", markup=False)

    if trace.invoice is not None:
        console.print(f"Invoice: #{trace.invoice.id} total {format_money(trace.invoice.total_amount)}")
    else:
        console.print("Invoice: [not generated]", markup=False)


MENU = [
    ("1", "Create patient", create_patient),
    ("2", "List patients", list_patients),
    ("3", "List lab tests", list_lab_tests),
    ("4", "Create test order", create_order),
    ("5", "Collect sample (associate to order item)", collect_sample),
    ("6", "Record result for an order item", record_result),
    ("7", "Generate invoice for an order", generate_invoice),
    ("8", "View order trace (order -> items -> sample -> result)", view_order_trace),
    ("9", "List orders", list_orders),
]


def interactive_menu(ctx: LabContext):
    """Display interactive menu for lab operations"""
    actions = {key: action for key, _, action in MENU}

    while True:
        console.print("\n[bold green]Choose an option:[/bold green]")
        for key, label, _ in MENU:
            console.print(f"  {key}. {label}")
        console.print("  0. Exit")

        choice = Prompt.ask("Enter choice").strip()
        if choice == "0":
            console.print("\n[bold blue]Exiting. Bye![/bold blue]")
            break

        action = actions.get(choice)
        if action is None:
            console.print("Invalid option. Try again.")
            continue

        try:
            action(ctx)
        except LISException as e:
            logger.debug(f"Operation {choice} rejected: {e.error_code}")
            report_error(e)


def main():
    """Main entry point for the lab workflow tracker"""
    setup_logging()
    ctx = create_lab_context()

    try:
        display_welcome()
        if settings.seed_demo_data:
            seed_demo_data(ctx.workflow)
        interactive_menu(ctx)

    except KeyboardInterrupt:
        console.print("\n\n[bold yellow]Exiting. Bye![/bold yellow]")
    except Exception as e:
        logger.error(f"Fatal error in main: {str(e)}")
        console.print(f"❌ Fatal error: {str(e)}")
        sys.exit(1)
    finally:
        ctx.close()


if __name__ == "__main__":
    main()
