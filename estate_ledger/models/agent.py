"""Agent model."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class Agent:
    """Field agent responsible for a set of properties."""

    agent_id: str
    name: str
    department_id: str
    phone: str = ""
    email: str = ""
    commission_rate: Decimal | None = None  # Percentage, e.g. 5 for 5%
