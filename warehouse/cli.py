"""
Interactive menu for the warehouse.

Usage:
    warehouse-cli
    python -m warehouse.cli
"""
import getpass
import logging
import sys
from typing import Callable, Optional

from warehouse.config import settings
from warehouse.exceptions import (
    AuthenticationError, CategoryNotFoundError, EmptyInventoryError,
    InvalidQuantityError, StorageError
)
from warehouse.schemas.inventory import (
    CategoryInsertOutcome, CategoryDeleteOutcome, ProductAddOutcome, StockChangeStatus
)
from warehouse.security import login
from warehouse.service import Warehouse
from warehouse.utils.alerts import climate_advisory
from warehouse.utils.text_reports import format_analysis
from warehouse.utils.weather import WeatherClient

logger = logging.getLogger(__name__)

MENU = """
Warehouse Management System Menu:
1. Add Category
2. Delete Category
3. Add Product to a Category
4. Update Product Stock
5. Decrease Product Stock
6. Display All Categories and Products
7. Analyze Products
8. Print Products list
9. Exit
10. Save Inventory"""

EXIT_CHOICE = 9

TEMPERATURE_UNITS = {"imperial": "°F", "metric": "°C", "standard": "K"}


class WarehouseMenu:
    """Numbered menu loop over a Warehouse."""

    def __init__(
        self,
        warehouse: Warehouse,
        weather: Optional[WeatherClient] = None,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
        products_file: Optional[str] = None,
    ):
        self.warehouse = warehouse
        self.weather = weather
        self.input = input_func
        self.output = output
        self.products_file = products_file or settings.PRODUCTS_FILE
        self.actions = {
            1: self.add_category,
            2: self.delete_category,
            3: self.add_product,
            4: self.update_stock,
            5: self.decrease_stock,
            6: self.display_all,
            7: self.analyze,
            8: self.print_products,
            10: self.save,
        }

    # ====================
    # PROMPTS
    # ====================

    def prompt_text(self, label: str) -> str:
        return self.input(label).strip()

    def prompt_int(self, label: str) -> int:
        while True:
            raw = self.input(label).strip()
            try:
                return int(raw)
            except ValueError:
                self.output(f"'{raw}' is not a whole number. Please try again.")

    def prompt_category(self, label: str) -> Optional[str]:
        name = self.prompt_text(label)
        if not name:
            self.output("Category name cannot be empty.")
            return None
        return name

    # ====================
    # MENU ACTIONS
    # ====================

    def show_climate(self) -> None:
        if self.weather is None:
            return
        temperature = self.weather.get_temperature()
        advisory = climate_advisory(temperature)
        if advisory is None:
            self.output("")
            return
        unit = TEMPERATURE_UNITS.get(self.weather.units, "")
        self.output(f"Warehouse location temperature: {temperature:.2f}{unit}")
        self.output(advisory["message"])

    def add_category(self) -> None:
        name = self.prompt_category("Enter category name: ")
        if name is None:
            return
        if self.warehouse.add_category(name) == CategoryInsertOutcome.INSERTED:
            self.output(f"Category '{name}' added successfully.")
        else:
            self.output(f"Category '{name}' already exists.")

    def delete_category(self) -> None:
        name = self.prompt_category("Enter category name to delete: ")
        if name is None:
            return
        if self.warehouse.delete_category(name) == CategoryDeleteOutcome.DELETED:
            self.output(f"Category '{name}' deleted successfully.")
        else:
            self.output(f"Category '{name}' not found.")

    def add_product(self) -> None:
        self.output("Existing Categories:")
        self.output(self.warehouse.display_all())
        category = self.prompt_category("Enter category name where to add product: ")
        if category is None:
            return
        product_id = self.prompt_int("Enter product ID: ")
        name = self.prompt_text("Enter product name: ")
        quantity = self.prompt_int("Enter quantity: ")
        if not name:
            self.output("Product name cannot be empty.")
            return

        try:
            outcome = self.warehouse.add_product(category, product_id, name, quantity)
        except InvalidQuantityError as e:
            self.output(str(e))
            return

        if outcome == ProductAddOutcome.ADDED:
            self.output("Product added successfully.")
        elif outcome == ProductAddOutcome.CATEGORY_MISSING:
            self.output("Category does not exist. Please create the category first.")
        else:
            self.output(f"Product ID {product_id} already exists in '{category}'.")

    def update_stock(self) -> None:
        product_id = self.prompt_int("Enter product ID to update stock: ")
        quantity = self.prompt_int("Enter new quantity: ")
        try:
            change = self.warehouse.set_quantity(product_id, quantity)
        except InvalidQuantityError as e:
            self.output(str(e))
            return

        if change.status == StockChangeStatus.UPDATED:
            self.output(f"Product quantity updated to {change.quantity}.")
        else:
            self.output(f"Product {product_id} not found.")

    def decrease_stock(self) -> None:
        product_id = self.prompt_int("Enter product ID to decrease stock: ")
        amount = self.prompt_int("Enter quantity to decrease: ")
        try:
            change = self.warehouse.decrease_stock(product_id, amount)
        except InvalidQuantityError as e:
            self.output(str(e))
            return

        if change.status == StockChangeStatus.UPDATED:
            self.output(f"Decreased quantity by {amount}. New quantity: {change.quantity}")
        elif change.status == StockChangeStatus.INSUFFICIENT_STOCK:
            self.output(f"Not enough stock to decrease by {amount}. Current stock: {change.quantity}")
        else:
            self.output(f"Product {product_id} not found.")

    def display_all(self) -> None:
        self.output("All Categories and Products:")
        self.output(self.warehouse.display_all())

    def analyze(self) -> None:
        category = self.prompt_category("Enter category name to analyze: ")
        if category is None:
            return
        try:
            result = self.warehouse.analyze_category(category)
        except (CategoryNotFoundError, EmptyInventoryError) as e:
            self.output(str(e))
            return
        self.output("Analysis Report:")
        self.output(format_analysis(result))

    def print_products(self) -> None:
        category = self.prompt_text("Enter category name (leave blank for all): ") or None
        try:
            report = self.warehouse.products_report(category)
        except CategoryNotFoundError as e:
            self.output(str(e))
            return
        self.output("Inventory List:")
        self.output(report)

    def save(self) -> None:
        try:
            count = self.warehouse.save_file(self.products_file)
        except StorageError as e:
            self.output(f"Save failed: {e}")
            return
        self.output(f"Saved {count} product(s) to {self.products_file}.")

    # ====================
    # LOOP
    # ====================

    def run(self) -> None:
        """Loop until Exit is chosen or input runs out."""
        while True:
            self.show_climate()
            self.output(MENU)
            try:
                choice = self.prompt_int("Enter your choice: ")
            except EOFError:
                self.output("Exiting...")
                return

            if choice == EXIT_CHOICE:
                self.output("Exiting...")
                return

            action = self.actions.get(choice)
            if action is None:
                self.output("Invalid choice. Please try again.")
                continue
            try:
                action()
            except EOFError:
                self.output("Exiting...")
                return


def authenticate(input_func: Callable[[str], str] = input,
                 password_func: Callable[[str], str] = getpass.getpass) -> str:
    username = input_func("Enter username: ").strip()
    password = password_func("Enter password: ")
    if not login(username, password):
        raise AuthenticationError("Login failed. Invalid username or password.")
    return username


def main() -> int:
    logging.basicConfig(level=settings.CLI_LOG_LEVEL)

    try:
        authenticate(input, getpass.getpass)
    except AuthenticationError as e:
        print(e)
        return 1
    except (EOFError, KeyboardInterrupt):
        return 1
    print("Login successful!")

    warehouse = Warehouse()
    try:
        warehouse.load_file(settings.PRODUCTS_FILE)
    except StorageError as e:
        print(f"Unable to open file: {e}")
        return 1

    menu = WarehouseMenu(warehouse, weather=WeatherClient(), input_func=input)
    try:
        menu.run()
    except KeyboardInterrupt:
        print("\nExiting...")

    if settings.AUTOSAVE:
        try:
            warehouse.save_file(settings.PRODUCTS_FILE)
        except StorageError as e:
            logger.error(f"Inventory not saved: {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
