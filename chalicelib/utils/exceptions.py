__all__ = ["RecordNotFound", "NumberOfRetriesExceeded", "MandatoryFieldsAreNotFilled", "ValidationException",
           "UnsupportedReportType"]


# Generic Exceptions
class MandatoryFieldsAreNotFilled(Exception):
    LEVEL = 'warning'


# Store exceptions
class RecordNotFound(Exception):
    LEVEL = 'warning'


# DB Performance Exception
class NumberOfRetriesExceeded(Exception):
    pass


# Validations exceptions
class ValidationException(Exception):
    LEVEL = 'warning'


class UnsupportedReportType(ValidationException):
    pass
