import os
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from chalice import Response

from chalicelib import exports
from chalicelib.constants.constants import RECENT_RECORDS_LIMIT, DEFAULT_LOW_STOCK_THRESHOLD, REPORT_TYPE_SUMMARY, \
    REPORT_TYPE_SALES, REPORT_TYPE_DEBTS, CSV_REPORT_TYPES, CSV_FILENAME
from chalicelib.constants.status_codes import http200
from chalicelib.customers import Customer
from chalicelib.inventory import InventoryItem
from chalicelib.orders import Order
from chalicelib.suppliers import Supplier
from chalicelib.transactions import Transaction
from chalicelib.utils import app as utils_app, data as utils_data
from chalicelib.utils.exceptions import UnsupportedReportType
from chalicelib.utils.logger import logger

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def low_stock_threshold() -> Decimal:
    return utils_data.to_decimal(os.environ.get('LOW_STOCK_THRESHOLD'), default=Decimal(DEFAULT_LOW_STOCK_THRESHOLD))


def most_recent(entities: List, limit: int = RECENT_RECORDS_LIMIT) -> List[Dict]:
    """
    Last `limit` records by date, oldest first.
    The sort is stable so records with equal dates stay in insertion order.
    """
    by_date = sorted(entities, key=lambda entity: utils_data.parse_datetime(entity.date) or _EPOCH)
    return [entity.to_ui() for entity in by_date[-limit:]] if limit > 0 else []


def sum_field(entities: List, field: str) -> Decimal:
    return utils_data.sum_decimals(getattr(entity, field) for entity in entities)


def get_summary(store) -> Dict:
    orders = Order.load_all(store)
    customers = Customer.load_all(store)
    suppliers = Supplier.load_all(store)
    inventory = InventoryItem.load_all(store)
    transactions = Transaction.load_all(store)
    threshold = low_stock_threshold()

    return {
        'totalSales': sum_field(orders, 'total'),
        'totalOrders': len(orders),
        'totalCustomers': len(customers),
        'totalInventory': sum_field(inventory, 'quantity'),
        'totalSuppliers': len(suppliers),
        'totalTransactions': len(transactions),
        'recentOrders': most_recent(orders),
        'recentTransactions': most_recent(transactions),
        'totalSupplierDebt': sum_field(suppliers, 'debt'),
        'totalCustomerPending': sum_field(customers, 'pending_amount'),
        'lowStockItems': [item.to_ui() for item in inventory if item.quantity < threshold]
    }


def get_sales_report(store, start_date: Optional[date] = None, end_date: Optional[date] = None) -> Dict:
    orders = []
    for order in Order.load_all(store):
        order_day = (utils_data.parse_datetime(order.date) or _EPOCH).date()
        if start_date is not None and order_day < start_date:
            continue
        if end_date is not None and order_day > end_date:
            continue
        orders.append(order)

    return {
        'startDate': start_date.isoformat() if start_date else None,
        'endDate': end_date.isoformat() if end_date else None,
        'totalSales': sum_field(orders, 'total'),
        'orderCount': len(orders),
        'orders': [order.to_ui() for order in orders]
    }


def get_debts_report(store) -> Dict:
    suppliers = [supplier for supplier in Supplier.load_all(store) if supplier.debt > 0]
    customers = [customer for customer in Customer.load_all(store) if customer.pending_amount > 0]

    return {
        'totalSupplierDebt': sum_field(suppliers, 'debt'),
        'totalCustomerPending': sum_field(customers, 'pending_amount'),
        'suppliers': [supplier.to_ui() for supplier in suppliers],
        'customers': [customer.to_ui() for customer in customers]
    }


def build_report(request, store, default_type: str = REPORT_TYPE_SUMMARY) -> Tuple[str, Dict]:
    report_type = (utils_data.get_query_param(request, 'type') or default_type).lower()
    if report_type == REPORT_TYPE_SUMMARY:
        return report_type, get_summary(store)
    if report_type == REPORT_TYPE_SALES:
        start_date = utils_data.parse_date_param(utils_data.get_query_param(request, 'startDate'), 'startDate')
        end_date = utils_data.parse_date_param(utils_data.get_query_param(request, 'endDate'), 'endDate')
        return report_type, get_sales_report(store, start_date, end_date)
    if report_type == REPORT_TYPE_DEBTS:
        return report_type, get_debts_report(store)
    raise UnsupportedReportType(f'Unsupported report type={report_type}')


@utils_app.request_exception_handler
@utils_app.log_start_finish
def endpoint_get_report(request, store) -> Response:
    report_type, report = build_report(request, store)
    logger.info(f"endpoint_get_report ::: returning {report_type=}")
    return Response(status_code=http200, body=report)


@utils_app.request_exception_handler
@utils_app.log_start_finish
def endpoint_export_report(request, store) -> Response:
    report_type, report = build_report(request, store, default_type=REPORT_TYPE_SALES)
    if report_type not in CSV_REPORT_TYPES:
        raise UnsupportedReportType(f'Report type={report_type} can not be exported to CSV')
    today = datetime.now(timezone.utc)
    if report_type == REPORT_TYPE_SALES:
        csv_content = exports.build_sales_csv(report)
    else:
        csv_content = exports.build_debts_csv(report, today=today.date())
    filename = CSV_FILENAME.format(report_type=report_type, day=today.strftime('%Y%m%d'))
    logger.info(f"endpoint_export_report ::: returning {filename=}")
    return Response(
        status_code=http200,
        body=csv_content,
        headers={
            'Content-Type': 'text/csv; charset=utf-8',
            'Content-Disposition': f'attachment; filename="{filename}"'
        }
    )
