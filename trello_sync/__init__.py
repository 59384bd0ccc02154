"""
Trello Sprint Board Builder

Idempotently provisions a Trello workspace, board, lists, labels and
sprint cards (with checklists and dev-notes comments) from a fixed plan.
"""

__version__ = "1.0.0"
__author__ = "Adesh Srivastava"
