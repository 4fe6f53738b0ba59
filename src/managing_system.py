import logging
import os

import reports
from database import StatementError
from prompts import (
    FieldResult, at_least, non_empty, one_of_range, parse_int, parse_text, prompt_field,
)
from records import Car, ClosedRequest, Customer, Mechanic, Ownership, ServiceRequest

logger = logging.getLogger(__name__)

EXIT_CHOICE = 11


class ManagingSystem:
    """Menu actions of the shop: record workflows and canned reports."""

    def __init__(self, session):
        self.session = session
        self.db = session.db
        self.console = session.console
        self.actions = {
            1: self.add_customer,
            2: self.add_mechanic,
            3: self.add_car,
            4: self.insert_service_request,
            5: self.close_service_request,
            6: lambda: self.run_report(reports.CUSTOMERS_WITH_BILL_LESS_THAN_100),
            7: lambda: self.run_report(reports.CUSTOMERS_WITH_MORE_THAN_20_CARS),
            8: lambda: self.run_report(reports.CARS_BEFORE_1995_WITH_50000_MILES),
            9: lambda: self.run_report(reports.K_CARS_WITH_THE_MOST_SERVICES),
            10: lambda: self.run_report(reports.CUSTOMERS_BY_TOTAL_BILL),
        }

    def display_menu(self):
        """Display main menu"""
        write = self.console.write
        write("MAIN MENU")
        write("---------")
        write("1. AddCustomer")
        write("2. AddMechanic")
        write("3. AddCar")
        write("4. InsertServiceRequest")
        write("5. CloseServiceRequest")
        write("6. ListCustomersWithBillLessThan100")
        write("7. ListCustomersWithMoreThan20Cars")
        write("8. ListCarsBefore1995With50000Milles")
        write("9. ListKCarsWithTheMostServices")
        write("10. ListCustomersInDescendingOrderOfTheirTotalBill")
        write(f"{EXIT_CHOICE}. < EXIT")

    def read_choice(self):
        return prompt_field(self.console, "Please make your choice: ", parse_int)

    def dispatch(self, choice):
        """
        Run the action for a menu choice. Numbers with no action are ignored.
        A rejected statement ends the action and is reported; it never ends
        the session.
        """
        action = self.actions.get(choice)
        if action is None:
            return
        try:
            action()
        except StatementError as e:
            logger.error("Menu action %s abandoned: %s", choice, e)
            self.console.write(f"Query failed: {e}")

    # ——— Record workflows ———
    def _insert(self, record):
        self.db.execute(*record.insert_statement())
        self.console.write(f"{type(record).__name__} added successfully!")

    def add_customer(self, **known):
        customer = Customer(**known).input_full_info(self.console)
        self._insert(customer)
        return customer

    def add_mechanic(self):
        self._insert(Mechanic().input_full_info(self.console))

    def add_car(self):
        self._insert(Car().input_full_info(self.console))

    def insert_service_request(self):
        """Open a service request for a customer found by last name (registering them if new)."""
        lname = prompt_field(self.console, "Enter customer last name:", parse_text, non_empty)
        matches = self.db.query_collect(
            "SELECT id, fname, lname, phone, address FROM Customer WHERE lname = ? ORDER BY id",
            (lname,),
        )

        if not matches:
            self.console.write("Person is not registered as a customer, please register them:")
            customer_id = self.add_customer(lname=lname).values["id"]
        elif len(matches) == 1:
            customer_id = int(matches[0][0])
            self.console.write(f"Found customer {matches[0][1]} {matches[0][2]} (id {customer_id})")
        else:
            customer_id = self._choose_customer(matches)

        self.console.write("Now you may add service information for the customer:")
        request = ServiceRequest(customer_id=customer_id).input_full_info(self.console)
        self._insert(request)

        ownership = Ownership(customer_id=customer_id, car_vin=request.values["car_vin"])
        self._insert(ownership.input_full_info(self.console))

    def _choose_customer(self, matches):
        """Let the operator pick one of several customers sharing a last name."""
        self.console.write(f"{len(matches)} customers share that last name:")
        for number, (cid, fname, lname, phone, address) in enumerate(matches, start=1):
            self.console.write(f"{number}. {fname} {lname}\tid: {cid}\tphone: {phone}\taddress: {address}")
        number = prompt_field(self.console, "Select the customer number:", parse_int, one_of_range(len(matches)))
        return int(matches[number - 1][0])

    def close_service_request(self):
        """Close an open service request: assign the mechanic, the closing date and the bill."""
        rid = prompt_field(self.console, "Enter request id:", parse_int, at_least(0))
        rows = self.db.query_collect("SELECT rid, date FROM Service_Request WHERE rid = ?", (rid,))
        if not rows:
            self.console.write(f"No service request with id {rid}.")
            return
        if self.db.query_count("SELECT wid FROM Closed_Request WHERE rid = ?", (rid,)):
            self.console.write(f"Service request {rid} is already closed.")
            return
        if self.db.query_count("SELECT id FROM Mechanic") == 0:
            self.console.write("No mechanics registered; add one first.")
            return
        opened_on = int(rows[0][1])

        closing = ClosedRequest(rid=rid).input_full_info(self.console)
        closing.values["mid"] = prompt_field(self.console, "Enter mechanic id:", parse_int, self._existing_mechanic)
        closing.values["date"] = prompt_field(self.console, "Enter closing date:", parse_int, at_least(opened_on))
        closing.values["comment"] = prompt_field(self.console, "Enter closing comment:", parse_text, non_empty)
        hours = prompt_field(self.console, "Enter labor hours:", parse_int, at_least(0))
        parts = prompt_field(self.console, "Enter parts cost:", parse_int, at_least(0))

        closing.values["bill"] = hours * self.session.config.labor_rate + parts
        self.console.write(f"Bill: {closing.values['bill']}")
        self._insert(closing)

    def _existing_mechanic(self, mid):
        if mid < 0:
            return FieldResult.failure("Must be at least 0")
        if self.db.query_count("SELECT id FROM Mechanic WHERE id = ?", (mid,)) == 0:
            return FieldResult.failure(f"No mechanic with id {mid}")
        return FieldResult.success(mid)

    # ——— Reports ———
    def run_report(self, report):
        """Print a canned report, and export it when an export directory is set."""
        params = None
        if report.needs_limit:
            params = (prompt_field(self.console, "How many cars should be listed?", parse_int, at_least(1)),)
        self.console.write(report.title)
        self.db.query_print(report.sql, params)

        if self.session.export_dir:
            path = os.path.join(self.session.export_dir, f"{report.name}.csv")
            frame = self.db.query_frame(report.sql, params)
            try:
                frame.to_csv(path, index=False)
            except OSError as e:
                logger.error("Export to %s failed: %s", path, e)
                self.console.write(f"Export failed: {e}")
                return
            self.console.write(f"Exported {len(frame)} row(s) to {path}")
