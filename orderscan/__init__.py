"""Order slip OCR.

Turns photographed paper receipts and order slips into structured
order records: customer, phone, address, totals, line items and notes,
with a quality flag for human review.
"""

__version__ = "1.0.0"
