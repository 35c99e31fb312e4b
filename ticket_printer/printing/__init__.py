"""
Printing subsystem for Ticket Printer.

This package groups printing-related functionality:

- names / shell / native / strategies / discovery: printer discovery
- imaging: grayscale + threshold preparation of uploaded images
- render: ticket layout to PDF
- dispatch: submit PDFs to the OS print spool

For convenience, common functions are re-exported for easy import.
"""

from .discovery import *
from .dispatch import *
from .errors import *
from .imaging import *
from .names import *
from .render import *
