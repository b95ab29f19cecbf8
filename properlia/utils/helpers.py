"""Helper utility functions"""
import re
import uuid
from decimal import Decimal, InvalidOperation

EMAIL_REGEX = re.compile(r'\A[\w+\-.]+@[a-z\d\-]+(\.[a-z\d\-]+)*\.[a-z]+\Z', re.IGNORECASE)

TRUE_VALUES = {'true', '1', 'yes', 'on'}
FALSE_VALUES = {'false', '0', 'no', 'off'}


def valid_email(email):
    """Check an email address against the contact form rules"""
    if not isinstance(email, str):
        return False
    return bool(EMAIL_REGEX.match(email.strip()))


def parse_bool(value):
    """
    Interpret a query-string or form boolean.
    Returns None when the value is not recognisably true or false.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return None
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return None


def parse_uuid(value):
    """Return a UUID for value, or None if it is not one"""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def parse_decimal(value):
    """Decimal from a JSON number or form string; raises ValueError when malformed"""
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValueError(value)
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(value)
    if not result.is_finite():
        raise ValueError(value)
    return result


def parse_int(value):
    """Integer from a JSON number or form string; raises ValueError when malformed"""
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, int):
        return value
    number = parse_decimal(value)
    if number != number.to_integral_value():
        raise ValueError(value)
    return int(number)


def normalize_name(value):
    """Lowercase and trim a lookup name"""
    if value is None:
        return None
    return str(value).strip().lower()


def truncate(text, length=20):
    """Cut text to length characters, marking the cut with '...'"""
    if text is None:
        return ''
    return text if len(text) <= length else f'{text[:length]}...'


def number_with_delimiter(number, delimiter=','):
    """1234567.5 -> '1,234,567.5'"""
    if number is None:
        return ''
    if isinstance(number, (Decimal, float)) and number == int(number):
        number = int(number)
    integer, _, fraction = str(number).partition('.')
    sign = ''
    if integer.startswith('-'):
        sign, integer = '-', integer[1:]
    groups = []
    while len(integer) > 3:
        groups.insert(0, integer[-3:])
        integer = integer[:-3]
    groups.insert(0, integer)
    formatted = sign + delimiter.join(groups)
    return f'{formatted}.{fraction}' if fraction else formatted
