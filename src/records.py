from prompts import (
    at_least, between, non_empty, parse_int, parse_text, prompt_field,
)


class Record:
    """Base class for a shop record collected from the operator."""

    table = ""
    columns = ()    # Column order of the insert
    fields = ()     # (column, label, parse, predicate) in prompt order

    def __init__(self, **values):
        self.values = {column: None for column in self.columns}
        self.values.update(values)

    def input_full_info(self, console):
        """Collect the fields not already known, one validated prompt at a time."""
        for column, label, parse, predicate in self.fields:
            if self.values.get(column) is not None:
                continue
            self.values[column] = prompt_field(console, label, parse, predicate)
        return self

    def get_full_info(self):
        """Return the record as a dictionary in column order."""
        return {column: self.values[column] for column in self.columns}

    def insert_statement(self):
        """Return the parameterized INSERT for this record and its parameters."""
        q = f"INSERT INTO {self.table} ({', '.join(self.columns)}) VALUES ({', '.join(['?'] * len(self.columns))})"
        return q, tuple(self.values[column] for column in self.columns)


ID_FIELD = (parse_int, at_least(0))
TEXT_FIELD = (parse_text, non_empty)


class Customer(Record):
    table = "Customer"
    columns = ("id", "fname", "lname", "phone", "address")
    fields = (
        ("fname", "Enter customer first name:", *TEXT_FIELD),
        ("id", "Enter customer id:", *ID_FIELD),
        ("lname", "Enter customer last name:", *TEXT_FIELD),
        ("phone", "Enter customer phone number:", *TEXT_FIELD),
        ("address", "Enter customer address:", *TEXT_FIELD),
    )


class Mechanic(Record):
    table = "Mechanic"
    columns = ("id", "fname", "lname", "experience")
    fields = (
        ("id", "Enter mechanic id:", *ID_FIELD),
        ("fname", "Enter mechanic first name:", *TEXT_FIELD),
        ("lname", "Enter mechanic last name:", *TEXT_FIELD),
        ("experience", "Enter mechanic years of experience:", parse_int, between(0, 100)),
    )


class Car(Record):
    table = "Car"
    columns = ("vin", "make", "model", "year")
    fields = (
        ("vin", "Enter car VIN:", *TEXT_FIELD),
        ("make", "Enter car make:", *TEXT_FIELD),
        ("model", "Enter car model:", *TEXT_FIELD),
        ("year", "Enter car year:", parse_int, at_least(1970)),
    )


class ServiceRequest(Record):
    """A service request; customer_id is set by the workflow, not prompted."""

    table = "Service_Request"
    columns = ("rid", "customer_id", "car_vin", "date", "odometer", "complain")
    fields = (
        ("car_vin", "Enter car VIN:", *TEXT_FIELD),
        ("complain", "Enter car complaint:", *TEXT_FIELD),
        ("odometer", "Enter odometer reading:", parse_int, at_least(0)),
        ("rid", "Enter request id:", *ID_FIELD),
        ("date", "Enter service date:", parse_int, at_least(0)),
    )


class Ownership(Record):
    table = "Owns"
    columns = ("ownership_id", "customer_id", "car_vin")
    fields = (
        ("ownership_id", "Enter ownership id:", *ID_FIELD),
    )


class ClosedRequest(Record):
    """Closing record of a service request; rid, mid, date and bill come from the close workflow."""

    table = "Closed_Request"
    columns = ("wid", "rid", "mid", "date", "comment", "bill")
    fields = (
        ("wid", "Enter closing work id:", *ID_FIELD),
    )
