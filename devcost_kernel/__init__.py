"""
Devcost Kernel

Value objects and infrastructure for the system-development cost
accounting engine:
- Project, decision and journal line value objects
- Financial statement model with bottom-up total recalculation
- Decimal-only amount helpers
- Structured logging and a typed exception hierarchy
"""

__version__ = "0.1.0"
