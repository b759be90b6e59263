"""Base models shared across estate entities."""

from dataclasses import dataclass


@dataclass
class Department:
    """Business unit that groups properties (Residential, Office, ...)."""

    department_id: str
    name: str


@dataclass
class Guarantor:
    """Person guaranteeing a tenant's lease."""

    full_name: str
    phone: str = ""
    address: str = ""
    nin: str = ""  # National identification number, 11 digits
