from chalice import CORSConfig

CURRENCY_SYMBOL = '₹'
CURRENCY_PLACES = '1.00'
QUANTITY_PLACES = '1.000'
# numbers leave the API as JSON floats
MAX_NUMBER_EXPONENT = 308
DECIMAL_PRECISION = 400

RECENT_RECORDS_LIMIT = 5
DEFAULT_LOW_STOCK_THRESHOLD = 10

REPORT_TYPE_SUMMARY = 'summary'
REPORT_TYPE_SALES = 'sales'
REPORT_TYPE_DEBTS = 'debts'

CSV_REPORT_TYPES = (REPORT_TYPE_SALES, REPORT_TYPE_DEBTS)
CSV_FILENAME = 'food_supply_{report_type}_report_{day}.csv'

cors_config = CORSConfig(
    allow_origin='*',
    allow_headers=[
        'X-CSRF-Token', 'X-Requested-With', 'Accept', 'Accept-Version', 'Content-Length',
        'Content-MD5', 'Content-Type', 'Date', 'X-Api-Version'
    ],
    allow_credentials=True
)
