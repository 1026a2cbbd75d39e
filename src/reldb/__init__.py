"""
reldb - Minimal In-Process Relational Engine

A small relational engine with typed, constrained columns, primary and
foreign key enforcement, and a narrow SQL dialect supporting CREATE,
DROP, INSERT, DELETE and SELECT with a two-way equality JOIN.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
