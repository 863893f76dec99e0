import json
from datetime import datetime, date, timezone
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any, Optional

from chalicelib.constants.constants import CURRENCY_PLACES, DECIMAL_PRECISION, MAX_NUMBER_EXPONENT
from chalicelib.utils import exceptions
from chalicelib.utils.logger import logger


def replace_dict_key(item, orig_key, new_key):
    if orig_key in item:
        if new_key not in item:
            item[new_key] = item[orig_key]
        del item[orig_key]


def substitute_keys(dict_to_process: dict, base_keys: dict, opt_dict=None):
    if opt_dict is None:
        opt_dict = {}
    all_keys = {**base_keys, **opt_dict}
    for key, val in all_keys.items():
        if val:
            replace_dict_key(dict_to_process, key, val)
        elif key in dict_to_process.keys():
            dict_to_process.pop(key, None)


def parse_raw_body(chalice_request):
    request_raw_body = chalice_request.raw_body
    if request_raw_body:
        try:
            item = json.loads(request_raw_body)
        except json.JSONDecodeError as error:
            raise exceptions.ValidationException(f'Request body is not valid JSON: {error}')
        return fix_values_from_ui(item=item)
    else:
        return {}


def fix_values_from_ui(item):
    """
    Remove keys with empty or None values and transform float to Decimal
    """
    if not isinstance(item, dict):
        raise exceptions.ValidationException('Request body must be a JSON object')
    if item.get('_values_from_ui_strategy') == 'delete_empty':
        list_to_cleanup = ['', None]
    else:
        list_to_cleanup = [None]
    item = cleanup_dict(item, list_to_cleanup)
    item.pop('_values_from_ui_strategy', None)
    result = json.dumps(item)
    return json.loads(result, parse_float=Decimal)


def cleanup_dict(item: dict, list_of_values: list):
    """ Remove None fields in dict with. Supports one nesting.  """

    def sub_clean(sub_item):
        return {
            key: value
            for key, value in sub_item.items()
            if value not in list_of_values
        }

    clean = {}
    for k, v in item.items():
        if isinstance(v, dict):
            nested = sub_clean(v)
            if len(nested.keys()) > 0:
                clean[k] = nested
        elif v not in list_of_values:
            clean[k] = v
    return clean


def get_query_param(chalice_request, name: str) -> Optional[str]:
    query_params = chalice_request.query_params or {}
    return query_params.get(name) or None


def to_decimal(value: Any, default: Optional[Decimal] = Decimal('0.00'), places: str = CURRENCY_PLACES):
    """
    Convert an incoming number to a quantized Decimal.
    Values that are not finite numbers, or too large to be sent back as JSON, fall back to default.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        number = None
    if number is None or not number.is_finite() or number.adjusted() >= MAX_NUMBER_EXPONENT:
        logger.warning(f'to_decimal ::: {value=} is not a number, using {default=}')
        return default
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return number.quantize(Decimal(places))


def sum_decimals(values) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return sum(values, Decimal('0.00'))


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='seconds')


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 string (a trailing Z is accepted) into an aware datetime.
    Naive values are treated as UTC. Returns None when value can not be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def normalize_timestamp(value: Any) -> str:
    if value is None:
        return now_iso()
    parsed = parse_datetime(value)
    if parsed is None:
        logger.warning(f'normalize_timestamp ::: {value=} is not an ISO timestamp, using current time')
        return now_iso()
    return parsed.isoformat(timespec='seconds')


def parse_date_param(value: Optional[str], name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise exceptions.ValidationException(f'{name}={value} is not a valid YYYY-MM-DD date')
