"""
CSV rendering of the sales and debts reports.

Rows go through csv.writer, so a name or description holding a comma or a quote
is quoted instead of spilling into the next column.
"""
import csv
import io
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from chalicelib.constants.constants import CURRENCY_SYMBOL
from chalicelib.utils import data as utils_data

DISPLAY_DATE_FORMAT = '%b %d, %Y'
ROW_DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'
ROW_DATE_FORMAT = '%Y-%m-%d'


def format_money(value) -> str:
    return f'{CURRENCY_SYMBOL}{Decimal(str(value or 0)):.2f}'


def format_row_datetime(value) -> str:
    parsed = utils_data.parse_datetime(value)
    return parsed.strftime(ROW_DATETIME_FORMAT) if parsed else str(value or '')


def date_range_text(start_date: Optional[str], end_date: Optional[str]) -> str:
    if not start_date and not end_date:
        return 'All time'
    formatted_start = date.fromisoformat(start_date).strftime(DISPLAY_DATE_FORMAT) if start_date else '...'
    formatted_end = date.fromisoformat(end_date).strftime(DISPLAY_DATE_FORMAT) if end_date else '...'
    if formatted_start == formatted_end:
        return formatted_start
    return f'{formatted_start} - {formatted_end}'


def _render(rows: List[List]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerows(rows)
    return buffer.getvalue()


def build_sales_csv(report: Dict) -> str:
    rows = [
        ['Report Type', 'Sales Report'],
        ['Date Range', date_range_text(report.get('startDate'), report.get('endDate'))],
        ['Total Sales', format_money(report.get('totalSales'))],
        ['Order Count', report.get('orderCount', 0)],
        [],
        ['Order Date', 'Customer ID', 'Status', 'Total']
    ]
    for order in report.get('orders') or []:
        rows.append([
            format_row_datetime(order.get('date')),
            order.get('customerId'),
            order.get('status'),
            format_money(order.get('total'))
        ])
    return _render(rows)


def build_debts_csv(report: Dict, today: Optional[date] = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    rows = [
        ['Report Type', 'Debts Report'],
        ['Date', today.strftime(ROW_DATE_FORMAT)],
        ['Total Supplier Debts', format_money(report.get('totalSupplierDebt'))],
        ['Total Customer Pending', format_money(report.get('totalCustomerPending'))],
        [],
        ['Supplier Debts'],
        ['Supplier ID', 'Supplier Name', 'Debt Amount']
    ]
    for supplier in report.get('suppliers') or []:
        rows.append([supplier.get('id'), supplier.get('name'), format_money(supplier.get('debt'))])

    rows.extend([
        [],
        ['Customer Pending Payments'],
        ['Customer ID', 'Customer Name', 'Type', 'Pending Amount']
    ])
    for customer in report.get('customers') or []:
        rows.append([
            customer.get('id'),
            customer.get('name'),
            customer.get('type'),
            format_money(customer.get('pendingAmount'))
        ])
    return _render(rows)
