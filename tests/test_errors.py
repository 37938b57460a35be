import pytest

from iplens import (
    IPLensError,
    ErrorKind,
    TransportError,
    RateLimitExceededError,
    RequestError,
    ParseError,
    LookupTimeoutError,
    LimitExceededError,
    DataIntegrityError,
    ConfigurationError,
)


@pytest.mark.parametrize("cls, kind", [
    (TransportError, ErrorKind.TRANSPORT),
    (RateLimitExceededError, ErrorKind.RATE_LIMIT_EXCEEDED),
    (RequestError, ErrorKind.REQUEST),
    (ParseError, ErrorKind.PARSE),
    (LookupTimeoutError, ErrorKind.TIMEOUT),
    (LimitExceededError, ErrorKind.LIMIT_EXCEEDED),
    (DataIntegrityError, ErrorKind.DATA_INTEGRITY),
    (ConfigurationError, ErrorKind.CONFIGURATION),
])
def test_each_error_has_its_kind(cls, kind):
    error = cls("details")
    assert isinstance(error, IPLensError)
    assert error.kind is kind
    assert str(error) == f"{kind.value}: details"


def test_error_without_description_renders_kind_only():
    assert str(RateLimitExceededError()) == "rate limit exceeded"
    assert str(ErrorKind.TIMEOUT) == "timeout error"


def test_transport_error_keeps_status_code():
    error = TransportError("503 Service Unavailable", status_code=503)
    assert error.status_code == 503
    assert str(error) == "HTTP client library error: 503 Service Unavailable"


def test_data_integrity_error_keeps_country_code():
    error = DataIntegrityError("missing", country_code="ZZ")
    assert error.country_code == "ZZ"
    assert error.args == ("data integrity error: missing",)
