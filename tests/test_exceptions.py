"""Tests for the exception hierarchy and its HTTP mapping."""

from exceptions import (
    CustomerAlreadyExistsError,
    CustomerAuthenticationError,
    CustomerError,
    CustomerInactiveError,
    CustomerNotFoundError,
    DuplicateIdentificationError,
    InvalidCustomerDataError,
    StorageError,
)
from main import ERROR_MAPPING


class TestExceptionHierarchy:

    def test_domain_errors_share_a_base(self):
        for error_class in (
            CustomerNotFoundError,
            CustomerAlreadyExistsError,
            CustomerInactiveError,
            InvalidCustomerDataError,
            CustomerAuthenticationError,
        ):
            assert issubclass(error_class, CustomerError)

    def test_storage_error_is_not_a_domain_error(self):
        err = DuplicateIdentificationError("2222222222")
        assert isinstance(err, StorageError)
        assert not isinstance(err, CustomerError)
        assert err.identification == "2222222222"
        assert "2222222222" in str(err)

    def test_every_domain_error_has_a_distinct_code(self):
        statuses = {status for status, _ in ERROR_MAPPING.values()}
        codes = {code for _, code in ERROR_MAPPING.values()}
        assert len(codes) == len(ERROR_MAPPING)
        assert statuses == {400, 401, 403, 404, 409}
