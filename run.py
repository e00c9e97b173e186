#!/usr/bin/env python3
"""Catalog Scroll Manager - Interactive local development tool."""

import asyncio
import os
import subprocess
import sys
import time
from pathlib import Path

import httpx

from src.application.coordinators.incremental_fetch_controller import (
    FeedViewStatus,
    IncrementalFetchController,
    describe_status,
)
from src.config import settings
from src.domain.entities.page_request import SortSpec
from src.domain.enums.sort_field import SortField
from src.domain.enums.sort_order import SortOrder
from src.infrastructure.database.connection import Database
from src.infrastructure.database.seed import seed_products
from src.infrastructure.external_services.product_api_client import ProductApiClient
from src.infrastructure.observability.logging_config import setup_logging

# Colors for output
RED = "\033[0;31m"
GREEN = "\033[0;32m"
BLUE = "\033[0;34m"
YELLOW = "\033[1;33m"
NC = "\033[0m"  # No Color

SCRIPT_DIR = Path(__file__).parent.resolve()
STOREFRONT_PORT = settings.port + 1

SORT_CYCLE = [
    SortSpec(SortField.NAME, SortOrder.ASC),
    SortSpec(SortField.NAME, SortOrder.DESC),
    SortSpec(SortField.PRICE, SortOrder.ASC),
    SortSpec(SortField.PRICE, SortOrder.DESC),
]


def clear_screen():
    """Clear the terminal screen."""
    os.system("clear" if os.name != "nt" else "cls")


def show_menu():
    """Display the main menu."""
    clear_screen()
    print(f"{BLUE}╔════════════════════════════════════════╗{NC}")
    print(f"{BLUE}║        Catalog Scroll Manager          ║{NC}")
    print(f"{BLUE}╚════════════════════════════════════════╝{NC}")
    print()
    print(f"{GREEN}1){NC} 🚀 Start catalog API (port {settings.port})")
    print(f"{GREEN}2){NC} 🛒 Start storefront proxy (port {STOREFRONT_PORT})")
    print(f"{GREEN}3){NC} 📦 Run database migrations")
    print(f"{GREEN}4){NC} 🌱 Seed demo products")
    print(f"{GREEN}5){NC} 📜 Browse catalog (infinite scroll)")
    print(f"{GREEN}6){NC} 🩺 Check API health")
    print(f"{GREEN}7){NC} 🚪 Exit")
    print()
    choice = input(f"{YELLOW}Select an option [1-7]: {NC}")
    return choice.strip()


def run_command(args: list[str]) -> int:
    """Run a command from the project root and return its exit code."""
    try:
        result = subprocess.run(args, cwd=SCRIPT_DIR, check=False, env=os.environ.copy())
        return result.returncode
    except FileNotFoundError:
        print(f"{RED}Error: {args[0]} not found. Is the project installed?{NC}")
        return 1


def start_api():
    """Serve the catalog API with uvicorn until interrupted."""
    print(f"{BLUE}Starting catalog API...{NC}")
    run_command(
        [sys.executable, "-m", "uvicorn", "src.api.main:app", "--port", str(settings.port)]
    )


def start_storefront():
    """Serve the storefront proxy with uvicorn until interrupted."""
    print(f"{BLUE}Starting storefront proxy → {settings.backend_api_url}{NC}")
    run_command(
        [sys.executable, "-m", "uvicorn", "src.api.storefront:app", "--port", str(STOREFRONT_PORT)]
    )


def run_migrations():
    """Apply Alembic migrations up to head."""
    print(f"{BLUE}Running migrations...{NC}")
    exit_code = run_command([sys.executable, "-m", "alembic", "upgrade", "head"])
    print()
    if exit_code == 0:
        print(f"{GREEN}Migrations applied.{NC}")
    else:
        print(f"{RED}Migrations failed.{NC}")
    input("Press Enter to return to menu...")


async def _seed() -> int:
    database = Database()
    database.connect()
    try:
        return await seed_products(database)
    finally:
        await database.dispose()


def seed_demo_products():
    """Insert the demo catalog if the products table is empty."""
    print(f"{BLUE}Seeding demo products...{NC}")
    inserted = asyncio.run(_seed())
    if inserted:
        print(f"{GREEN}Inserted {inserted} products.{NC}")
    else:
        print(f"{YELLOW}Products table already populated; nothing inserted.{NC}")
    input("Press Enter to return to menu...")


async def _browse() -> None:
    controller = IncrementalFetchController(
        ProductApiClient(), page_size=settings.default_page_size
    )
    sort_index = 0
    await controller.start()

    while True:
        print(f"{BLUE}[{controller.sort}] page cursor {controller.cursor}{NC}")
        for position, product in enumerate(controller.items, start=1):
            print(f"  {position:4d}. {product.name:<40} {product.price:>10}")
        status = controller.view_status
        colour = RED if status is FeedViewStatus.ERROR else GREEN
        print(f"{colour}{describe_status(controller)}{NC}")

        command = input(
            f"{YELLOW}[Enter] load more  [r] retry  [s] change sort  [q] quit: {NC}"
        ).strip().lower()
        if command == "q":
            return
        if command == "s":
            sort_index = (sort_index + 1) % len(SORT_CYCLE)
            await controller.change_sort(SORT_CYCLE[sort_index])
        else:
            await controller.load_more()
        clear_screen()


def browse_catalog():
    """Scroll through the catalog page by page in the terminal."""
    clear_screen()
    asyncio.run(_browse())


def check_health():
    """Call the catalog API health endpoint."""
    url = f"{settings.backend_api_url.rstrip('/')}/health"
    try:
        response = httpx.get(url, timeout=5.0)
        data = response.json()
        colour = GREEN if response.status_code == 200 else RED
        print(f"{colour}{response.status_code}: {data}{NC}")
    except httpx.HTTPError as e:
        print(f"{RED}Could not reach {url}: {e}{NC}")
    print()
    input("Press Enter to return to menu...")


def main():
    """Main application loop."""
    setup_logging(settings.log_level)

    while True:
        choice = show_menu()

        if choice == "1":
            start_api()
        elif choice == "2":
            start_storefront()
        elif choice == "3":
            run_migrations()
        elif choice == "4":
            seed_demo_products()
        elif choice == "5":
            browse_catalog()
        elif choice == "6":
            check_health()
        elif choice == "7":
            print(f"{GREEN}Goodbye!{NC}")
            sys.exit(0)
        else:
            print(f"{RED}Invalid option. Please try again.{NC}")
            time.sleep(2)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print(f"\n{YELLOW}Interrupted by user{NC}")
        sys.exit(0)
    except Exception as e:
        print(f"{RED}Error: {e}{NC}")
        sys.exit(1)
